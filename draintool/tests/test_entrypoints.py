import io
import json
from types import SimpleNamespace

import pytest
from botocore.exceptions import ClientError

from conftest import CLUSTER, INSTANCE_ID, build_envelope, build_message, place, task
from draintool import cli, reporting
from draintool.errors import NodeNotFound, WorkloadQueryFailed
from draintool.events import parse_event
from draintool.handler import handler


# ---------------------------------------------------------------------------
# Lambda handler
# ---------------------------------------------------------------------------
def test_handler_completes(aws):
    place(aws)
    event = build_envelope(build_message())
    result = handler(event, SimpleNamespace(aws_request_id="req-1"))
    assert result == {"instance_id": INSTANCE_ID, "outcome": "NO_MANAGED_WORK"}
    aws.asg.complete_lifecycle_action.assert_called_once()


def test_handler_ignores_launching(aws):
    event = build_envelope(build_message(transition="autoscaling:EC2_INSTANCE_LAUNCHING"))
    assert handler(event, None)["outcome"] == "IGNORED"
    aws.ecs.list_container_instances.assert_not_called()


def test_handler_resubmits_message_verbatim(aws, message):
    place(aws, tasks=[task("web", "service:web")])
    handler(build_envelope(message), None)
    assert aws.sns.publish.call_args.kwargs["Message"] == message


def test_handler_propagates_errors(aws):
    with pytest.raises(NodeNotFound):
        handler(build_envelope(build_message()), None)


# ---------------------------------------------------------------------------
# CLI
# ---------------------------------------------------------------------------
def test_cli_parse(payload, capsys):
    cli.main(["parse", payload])
    out = json.loads(capsys.readouterr().out)
    assert out["instance_id"] == INSTANCE_ID
    assert out["cluster_name"] == CLUSTER


def test_cli_run_from_file(aws, payload, tmp_path):
    path = tmp_path / "event.json"
    path.write_text(payload)
    place(aws)
    cli.main(["run", f"@{path}"])
    aws.asg.complete_lifecycle_action.assert_called_once()


def test_cli_run_from_stdin_dry_run(aws, payload, monkeypatch):
    monkeypatch.setattr("sys.stdin", io.StringIO(payload))
    place(aws, tasks=[task("adhoc", "family:x")])
    cli.main(["run", "-", "--dry-run"])
    aws.ecs.stop_task.assert_not_called()
    aws.asg.complete_lifecycle_action.assert_not_called()


def test_cli_error_exits_nonzero(aws):
    with pytest.raises(SystemExit) as exc_info:
        cli.main(["run", '{"Records": []}'])
    assert exc_info.value.code == 1


def test_cli_without_command_prints_help(capsys):
    cli.main([])
    assert "usage: draintool" in capsys.readouterr().out


# ---------------------------------------------------------------------------
# inspect / reporting
# ---------------------------------------------------------------------------
def test_build_node_report(aws, payload):
    place(aws, tasks=[task("web", "service:web"), task("adhoc", "")])

    report = reporting.build_node_report(parse_event(payload))

    assert report["status"] == "ACTIVE"
    assert report["managed_tasks"] == 1
    assert report["standalone_tasks"] == 1
    assert [r["Drain action"] for r in report["tasks"]] == ["wait for reschedule", "stop"]
    aws.ecs.update_container_instances_state.assert_not_called()
    aws.ecs.stop_task.assert_not_called()


def test_cli_inspect_json(aws, payload, capsys):
    place(aws, tasks=[task("web", "service:web")])
    cli.main(["inspect", payload, "--json"])
    out = json.loads(capsys.readouterr().out)
    assert out["tasks"][0]["Task"] == "web"
    assert out["tasks"][0]["Kind"] == "managed"


def test_cli_inspect_table(aws, payload, capsys):
    place(aws, tasks=[task("adhoc", "family:x")])
    cli.main(["inspect", payload])
    out = capsys.readouterr().out
    assert "Managed/standalone: 0/1" in out
    assert "adhoc" in out


def test_cli_inspect_api_error(aws, payload):
    place(aws)
    aws.ecs.list_tasks.side_effect = ClientError(
        {"Error": {"Code": "AccessDeniedException", "Message": "denied"}}, "ListTasks")
    with pytest.raises(SystemExit) as exc_info:
        cli.main(["inspect", payload])
    assert exc_info.value.code == 1


def test_build_node_report_wraps_api_error(aws, payload):
    place(aws)
    aws.ecs.describe_tasks.side_effect = ClientError(
        {"Error": {"Code": "ThrottlingException", "Message": "slow down"}}, "DescribeTasks")
    aws.ecs.list_tasks.return_value = {"taskArns": ["arn:task/x"]}
    with pytest.raises(WorkloadQueryFailed, match="ThrottlingException"):
        reporting.build_node_report(parse_event(payload))


def test_build_node_report_blank_cells(aws, payload):
    place(aws, tasks=[{"taskArn": "arn:aws:ecs:us-east-1:123456789012:task/prod-cluster/adhoc"}])
    row = reporting.build_node_report(parse_event(payload))["tasks"][0]
    assert row["Group"] == "-"
    assert row["Status"] == "-"
