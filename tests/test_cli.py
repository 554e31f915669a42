import json
from pathlib import Path

import pytest
from loguru import logger
from typer.testing import CliRunner

from socialcli.cli.commands import app
from socialcli.host import store as store_module
from socialcli.host import load_host_state, save_host_state, seed_demo_state

runner = CliRunner()


@pytest.fixture
def store_path(socialcli_home: Path, tmp_path: Path):
    path = tmp_path / "host.json"
    save_host_state(seed_demo_state(), path)
    yield path
    logger.remove()


def _run(store_path: Path, *args: str, input: str | None = None):
    return runner.invoke(app, ["--store", str(store_path), *args], input=input)


def test_version() -> None:
    result = runner.invoke(app, ["--version"])
    assert result.exit_code == 0
    assert "socialcli v" in result.output


def test_member_add_by_slug_with_partial_failure(store_path: Path) -> None:
    result = _run(store_path, "group", "member", "add", "--group-id", "bar", "-u", "bob", "-u", "nobody")
    assert result.exit_code == 1
    assert "Added user #20 to group #45 as member." in result.output
    assert "No user found by that username or ID: nobody." in result.output
    assert "1 succeeded, 1 failed" in result.output
    assert any(m.user_id == 20 and m.group_id == 45 for m in load_host_state(store_path).memberships)


def test_member_add_invalid_role_falls_back_to_member(store_path: Path) -> None:
    result = _run(store_path, "group", "member", "join", "-g", "3", "-u", "carol", "--role", "owner")
    assert result.exit_code == 0
    assert "as member." in result.output


def test_member_add_porcelain_prints_ids(store_path: Path) -> None:
    result = _run(store_path, "group", "member", "add", "-g", "foo", "-u", "bob", "-u", "30", "--porcelain")
    assert result.exit_code == 0
    assert result.output.split() == ["20", "30"]


def test_member_add_unknown_group_is_terminal(store_path: Path) -> None:
    result = _run(store_path, "group", "member", "add", "-g", "nope", "-u", "bob")
    assert result.exit_code == 1
    assert "Error: No group found by that slug or ID: nope." in result.output


def test_member_remove_declined(store_path: Path) -> None:
    result = _run(store_path, "group", "member", "remove", "-g", "bar", "-u", "carol", input="n\n")
    assert result.exit_code == 1
    assert "Aborted" in result.output
    assert any(m.user_id == 30 and m.group_id == 45 for m in load_host_state(store_path).memberships)


def test_member_remove_with_yes(store_path: Path) -> None:
    result = _run(store_path, "group", "member", "remove", "-g", "bar", "-u", "carol", "--yes")
    assert result.exit_code == 0
    assert "Member #30 removed from the group #45." in result.output


def test_member_list_json(store_path: Path) -> None:
    result = _run(store_path, "group", "member", "list", "bar", "--format", "json", "--fields", "user_id,role")
    assert result.exit_code == 0
    assert json.loads(result.output) == [{"user_id": 10, "role": "admin"}, {"user_id": 30, "role": "mod"}]


def test_member_list_ids_and_role_filter(store_path: Path) -> None:
    result = _run(store_path, "group", "member", "list", "45", "--role", "mod", "--format", "ids")
    assert result.exit_code == 0
    assert result.output.strip() == "30"


def test_member_list_empty_is_error(store_path: Path) -> None:
    result = _run(store_path, "group", "member", "list", "foo", "--role", "banned")
    assert result.exit_code == 1
    assert "No group members found." in result.output


def test_member_get_groups(store_path: Path) -> None:
    result = _run(store_path, "group", "member", "get-groups", "-u", "alice")
    assert result.exit_code == 0
    assert "Found 2 group(s) from member #10." in result.output
    assert "Current group(s) from member #10: 3, 45." in result.output


def test_member_promote_invalid_role_before_resolution(store_path: Path) -> None:
    result = _run(store_path, "group", "member", "promote", "-g", "nope", "-u", "bob", "--role", "member")
    assert result.exit_code == 1
    assert "You need a valid role to promote the member." in result.output


def test_member_promote_and_demote(store_path: Path) -> None:
    promoted = _run(store_path, "group", "member", "promote", "-g", "foo", "-u", "alice", "--role", "mod")
    assert promoted.exit_code == 0
    demoted = _run(store_path, "group", "member", "demote", "-g", "foo", "-u", "alice")
    assert demoted.exit_code == 0
    assert 'demoted to the "member" status' in demoted.output


def test_member_ban_and_unban(store_path: Path) -> None:
    banned = _run(store_path, "group", "member", "ban", "-g", "bar", "-u", "carol", "-y")
    assert banned.exit_code == 0
    unbanned = _run(store_path, "group", "member", "unban", "-g", "bar", "-u", "carol", input="y\n")
    assert unbanned.exit_code == 0
    assert "Member #30 unbanned from the group #45." in unbanned.output


def test_groups_component_must_be_active(store_path: Path) -> None:
    state = load_host_state(store_path)
    state.active_components = ["activity"]
    save_host_state(state, store_path)
    result = _run(store_path, "group", "member", "list", "bar")
    assert result.exit_code == 1
    assert "The Groups component is not active." in result.output


def test_notification_create_porcelain(store_path: Path) -> None:
    result = _run(
        store_path, "notification", "create", "-u", "bob", "--component", "groups", "--action", "x", "--porcelain"
    )
    assert result.exit_code == 0
    assert result.output.strip() == "522"


def test_notification_create_silent(store_path: Path) -> None:
    result = _run(store_path, "notification", "add", "-u", "10", "--silent")
    assert result.exit_code == 0
    assert result.output == ""
    assert len(load_host_state(store_path).notifications) == 3


def test_notification_get_json(store_path: Path) -> None:
    result = _run(store_path, "notification", "see", "520", "--format", "json", "--fields", "id,component_name")
    assert result.exit_code == 0
    assert json.loads(result.output) == {"id": 520, "component_name": "groups"}


def test_notification_get_missing(store_path: Path) -> None:
    result = _run(store_path, "notification", "get", "999999")
    assert result.exit_code == 1
    assert "No notification found by that ID: 999999." in result.output


def test_notification_delete_batch(store_path: Path) -> None:
    result = _run(store_path, "notification", "delete", "520", "999999", "--yes")
    assert result.exit_code == 1
    assert "Notification #520 deleted." in result.output
    assert "No notification found by that ID: 999999." in result.output
    assert [n.id for n in load_host_state(store_path).notifications] == [521]


def test_notification_delete_declined_keeps_items(store_path: Path) -> None:
    result = _run(store_path, "notification", "trash", "520", input="n\n")
    assert result.exit_code == 1
    assert len(load_host_state(store_path).notifications) == 2


def test_notification_generate(store_path: Path) -> None:
    result = _run(store_path, "notification", "generate", "--count", "4", "--silent")
    assert result.exit_code == 0
    created = load_host_state(store_path).notifications[2:]
    assert len(created) == 4
    assert {n.component_name for n in created} == {"groups"}
    assert {n.component_action for n in created} == {"comment_reply"}


def test_notification_list_filters(store_path: Path) -> None:
    result = _run(store_path, "notification", "list", "-u", "bob", "--format", "ids")
    assert result.exit_code == 0
    assert result.output.strip() == "521"
    empty = _run(store_path, "notification", "list", "--component", "messages")
    assert empty.exit_code == 1
    assert "No notification items found." in empty.output


def test_tool_repair(store_path: Path) -> None:
    result = _run(store_path, "tool", "fix", "friend-count")
    assert result.exit_code == 0
    assert "Counting the number of friends for each user. Complete!" in result.output
    unknown = _run(store_path, "tool", "repair", "nope")
    assert unknown.exit_code == 1
    assert "There is no repair tool with that name." in unknown.output


def test_tool_reinstall_emails(store_path: Path) -> None:
    result = _run(store_path, "tool", "reinstall-emails", "--yes")
    assert result.exit_code == 0
    assert "Emails have been successfully reinstalled." in result.output
    assert load_host_state(store_path).emails


def test_onboard_demo_and_status(socialcli_home: Path) -> None:
    result = runner.invoke(app, ["onboard", "--demo"])
    assert result.exit_code == 0
    assert (socialcli_home / "config.json").exists()
    assert (socialcli_home / "data" / "host.json").exists()
    status = runner.invoke(app, ["status"])
    assert status.exit_code == 0
    assert "Groups: 2" in status.output
    logger.remove()


def test_notification_list_count_ignores_fields(store_path: Path) -> None:
    result = _run(store_path, "notification", "list", "--format", "count", "--fields", "id")
    assert result.exit_code == 0
    assert result.output.strip() == "2"


def test_notification_generate_writes_store_once(store_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    writes: list[Path] = []
    original = store_module.save_host_state

    def counting_save(state, path):
        writes.append(path)
        original(state, path)

    monkeypatch.setattr(store_module, "save_host_state", counting_save)
    result = _run(store_path, "notification", "generate", "--count", "25", "--silent")

    assert result.exit_code == 0
    assert writes == [store_path]
    ids = [n.id for n in load_host_state(store_path).notifications]
    assert ids[2:] == list(range(522, 547))


def test_member_command_reads_store_once(store_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    reads: list[Path] = []
    original = store_module.load_host_state

    def counting_load(path):
        reads.append(path)
        return original(path)

    monkeypatch.setattr(store_module, "load_host_state", counting_load)
    result = _run(store_path, "group", "member", "list", "bar", "--format", "ids")

    assert result.exit_code == 0
    assert result.output.strip() == "10 30"
    assert reads == [store_path]
