"""Tests for the GitHub Actions step boundary."""
from __future__ import annotations

import io

from tower_launch.actions import ActionsHarness


def test_input_name_mapping():
    assert ActionsHarness.input_env_name("certificate-path") == "INPUT_CERTIFICATE-PATH"
    assert ActionsHarness.input_env_name("my input") == "INPUT_MY_INPUT"


def test_get_input_strips_and_treats_empty_as_unset():
    harness = ActionsHarness(environ={"INPUT_ANSIBLE-USER": "  deploy \n", "INPUT_AZURE-SUBSCRIPTION": ""})
    assert harness.get_input("ansible-user") == "deploy"
    assert harness.get_input("azure-subscription") is None
    assert harness.get_input("template-id") is None


def test_set_output_appends_to_github_output_file(tmp_path):
    out = tmp_path / "github_output"
    out.write_text("EXISTING=1\n", encoding="utf-8")
    stdout = io.StringIO()
    harness = ActionsHarness(environ={"GITHUB_OUTPUT": str(out)}, stdout=stdout)

    harness.set_output("RESOURCE_NAME", "rg_app01")

    lines = out.read_text(encoding="utf-8").splitlines()
    assert lines[0] == "EXISTING=1"
    assert lines[1].startswith("RESOURCE_NAME<<ghadelimiter_")
    assert lines[2] == "rg_app01"
    assert lines[3] == lines[1].split("<<", 1)[1]
    assert stdout.getvalue() == ""


def test_set_output_without_file_uses_workflow_command():
    stdout = io.StringIO()
    ActionsHarness(environ={}, stdout=stdout).set_output("RESOURCE_NAME", "rg_app01")
    assert stdout.getvalue() == "::set-output name=RESOURCE_NAME::rg_app01\n"


def test_set_failed_escapes_newlines():
    stdout = io.StringIO()
    harness = ActionsHarness(environ={}, stdout=stdout)
    harness.set_failed("line one\nline two 100%")
    assert harness.failed is True
    assert stdout.getvalue() == "::error::line one%0Aline two 100%25\n"


def test_get_raw_input_keeps_empty_values():
    harness = ActionsHarness(environ={"INPUT_ADDITIONAL-VARS": ""})
    assert harness.get_raw_input("additional-vars") == ""
    assert harness.get_raw_input("certificate-path") is None
