"""Record schema for the JSON-backed reference host."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class HostModel(BaseModel):
    """Base model for host records."""

    model_config = ConfigDict(extra="ignore", populate_by_name=True)


class User(HostModel):
    id: int
    login: str
    display_name: str = ""
    email: str = ""
    registered: str = ""
    last_activity: str | None = None
    total_friend_count: int = 0
    total_group_count: int = 0


class Group(HostModel):
    id: int
    slug: str
    name: str = ""
    status: str = "public"
    creator_id: int = 0
    date_created: str = ""
    total_member_count: int = 0


class Membership(HostModel):
    """One user's standing in one group."""

    id: int
    group_id: int
    user_id: int
    is_admin: bool = False
    is_mod: bool = False
    is_banned: bool = False
    is_confirmed: bool = True
    invite_sent: bool = False
    date_modified: str = ""

    @property
    def role(self) -> str:
        if self.is_admin:
            return "admin"
        if self.is_mod:
            return "mod"
        return "member"

    @property
    def is_active(self) -> bool:
        return self.is_confirmed and not self.is_banned


class Notification(HostModel):
    id: int
    user_id: int
    item_id: int = 0
    secondary_item_id: int = 0
    component_name: str
    component_action: str = ""
    date_notified: str = ""
    is_new: bool = True


class Friendship(HostModel):
    id: int
    initiator_user_id: int
    friend_user_id: int
    is_confirmed: bool = True


class Blog(HostModel):
    id: int
    owner_id: int
    domain: str = ""
    path: str = "/"


class BlogRecord(HostModel):
    blog_id: int
    user_id: int


class EmailTemplate(HostModel):
    slug: str
    subject: str


class SiteCounters(HostModel):
    total_member_count: int = 0


class HostState(HostModel):
    """Everything the reference host persists."""

    users: list[User] = Field(default_factory=list)
    groups: list[Group] = Field(default_factory=list)
    memberships: list[Membership] = Field(default_factory=list)
    notifications: list[Notification] = Field(default_factory=list)
    friendships: list[Friendship] = Field(default_factory=list)
    blogs: list[Blog] = Field(default_factory=list)
    blog_records: list[BlogRecord] = Field(default_factory=list)
    emails: list[EmailTemplate] = Field(default_factory=list)
    active_components: list[str] = Field(
        default_factory=lambda: ["activity", "groups", "friends", "messages", "notifications"]
    )
    site: SiteCounters = Field(default_factory=SiteCounters)
