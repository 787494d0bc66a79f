"""Chat and conversation models."""

from typing import List, Optional

from .base import CamelModel


class FileAttachment(CamelModel):
    """Metadata of a file the member attached to a chat message."""
    id: Optional[str] = None
    file_name: str
    original_name: str
    file_type: str
    file_size: int


class ChatMessage(CamelModel):
    """A single interactive chat message."""
    id: Optional[str] = None
    user_id: Optional[str] = None
    session_id: Optional[str] = None
    sender_id: Optional[str] = None  # None for member messages
    sender_name: Optional[str] = None
    sender_role: Optional[str] = None
    sender_color: Optional[str] = None
    message: str
    timestamp: str  # clock time, e.g. "10:30 AM"
    date: str  # MM/DD/YY
    is_from_user: bool = False
    attachments: Optional[List[FileAttachment]] = None


class Conversation(CamelModel):
    """A message from the scripted member history."""
    id: Optional[str] = None
    sender_id: Optional[str] = None
    sender_name: Optional[str] = None
    sender_role: Optional[str] = None
    sender_color: Optional[str] = None
    message: str
    timestamp: str
    date: str
    month_label: Optional[str] = None
    is_from_member: bool = False


class TeamMember(CamelModel):
    """Display record of a specialist for the team roster."""
    id: str
    name: str
    role: str
    color: str
    avatar: str
