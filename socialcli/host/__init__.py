"""JSON-backed reference host: records, lookups and domain operations."""

from socialcli.host.demo import seed_demo_state
from socialcli.host.groups import GroupMembers
from socialcli.host.lookups import GroupLookup, NotificationLookup, UserLookup, build_lookups
from socialcli.host.notifications import Notifications
from socialcli.host.schema import HostState
from socialcli.host.store import HostStore, load_host_state, save_host_state
from socialcli.host.tools import REPAIR_TOOLS, RepairTool, reinstall_emails, run_repair

__all__ = [
    "GroupLookup",
    "GroupMembers",
    "HostState",
    "HostStore",
    "NotificationLookup",
    "Notifications",
    "REPAIR_TOOLS",
    "RepairTool",
    "UserLookup",
    "build_lookups",
    "load_host_state",
    "reinstall_emails",
    "run_repair",
    "save_host_state",
    "seed_demo_state",
]
