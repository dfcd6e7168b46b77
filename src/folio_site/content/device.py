"""
Device classification from the User-Agent header.
"""

from dataclasses import dataclass
from typing import Optional

from user_agents import parse as parse_user_agent

DESKTOP = "desktop"
PHONE = "phone"
TABLET = "tablet"


@dataclass(frozen=True)
class DeviceClass:
    """Exactly one of desktop, phone or tablet."""

    kind: str = DESKTOP

    @property
    def is_desktop(self) -> bool:
        return self.kind == DESKTOP

    @property
    def is_phone(self) -> bool:
        return self.kind == PHONE

    @property
    def is_tablet(self) -> bool:
        return self.kind == TABLET


def classify_device(user_agent: Optional[str]) -> DeviceClass:
    """
    Classifies a User-Agent string.

    Agents with no detectable device type (desktop browsers, bots, consoles,
    a missing header) count as desktop.
    """
    if not user_agent:
        return DeviceClass(DESKTOP)

    agent = parse_user_agent(user_agent)
    if agent.is_tablet:
        return DeviceClass(TABLET)
    if agent.is_mobile:
        return DeviceClass(PHONE)
    return DeviceClass(DESKTOP)
