"""
Menu model for DNS Switcher.

Describes what the menu-bar menu should contain as plain data, so the rumps
app only has to render it. Profile items carry their DNSProfile; static
items carry the action they trigger.
"""

from dataclasses import dataclass
from typing import List, Optional, Sequence, Union

from .logging_config import get_logger
from .profiles import Configuration, DNSProfile

logger = get_logger(__name__)


class MenuAction:
    """Actions a static menu item can trigger."""

    LOAD = "load"
    EDIT = "edit"
    RESTORE_DEFAULTS = "restore_defaults"
    OPEN_LOG = "open_log"
    QUIT = "quit"


INTERFACE_MENU_TITLE = "Interface"
LOAD_TITLE = "Load"
SERVERS_TITLE = "Servers:"


@dataclass(frozen=True)
class StaticEntry:
    title: str
    action: Optional[str] = None


@dataclass(frozen=True)
class ProfileEntry:
    profile: DNSProfile
    selected: bool = False

    @property
    def title(self) -> str:
        return self.profile.name


@dataclass(frozen=True)
class Separator:
    pass


MenuEntry = Union[StaticEntry, ProfileEntry, Separator]


def is_selected(profile: DNSProfile, current_servers: Sequence[str]) -> bool:
    """A profile is selected when its servers match exactly, order included."""
    return profile.servers == list(current_servers)


def build_profile_entries(
    configuration: Configuration, current_servers: Sequence[str]
) -> List[ProfileEntry]:
    """One entry per profile, top to bottom in document order."""
    entries = []
    seen = set()
    for profile in configuration.settings:
        if profile.name in seen:
            # rumps keys menu items by title
            logger.warning(f"Duplicate profile name '{profile.name}' hidden from the menu")
            continue
        seen.add(profile.name)
        entries.append(ProfileEntry(profile, selected=is_selected(profile, current_servers)))
    return entries


def select_interface(configuration: Configuration, available: Sequence[str]) -> str:
    """
    Make sure the configuration names an interface that exists.

    If it does not, the first available service is selected in place (but
    not saved). With no services at all the configured name is kept.
    """
    if configuration.interface in available or not available:
        return configuration.interface

    logger.info(
        f"Interface '{configuration.interface}' not available, using '{available[0]}'"
    )
    configuration.interface = available[0]
    return configuration.interface


def profile_submenu_entries(profile: DNSProfile) -> List[Union[StaticEntry, Separator]]:
    """Submenu for a profile: a Load action followed by informational lines."""
    items: List[Union[StaticEntry, Separator]] = [
        StaticEntry(LOAD_TITLE, action=MenuAction.LOAD),
        Separator(),
        StaticEntry(SERVERS_TITLE),
    ]
    if profile.servers:
        items.extend(StaticEntry(f"    {server}") for server in profile.servers)
    else:
        items.append(StaticEntry("    (DHCP)"))
    if profile.load_cmd:
        items.append(StaticEntry(f"Runs: {profile.load_cmd}"))
    return items


def static_entries(version: str) -> List[MenuEntry]:
    """The fixed part of the menu shown below the profiles."""
    return [
        Separator(),
        StaticEntry(INTERFACE_MENU_TITLE),
        Separator(),
        StaticEntry("Edit Servers…", MenuAction.EDIT),
        StaticEntry("Restore Default Servers", MenuAction.RESTORE_DEFAULTS),
        StaticEntry("Open Log", MenuAction.OPEN_LOG),
        Separator(),
        StaticEntry(f"v{version}"),
        StaticEntry("Quit", MenuAction.QUIT),
    ]


def build_menu(
    configuration: Configuration, current_servers: Sequence[str], version: str
) -> List[MenuEntry]:
    """The complete top-level menu."""
    entries: List[MenuEntry] = list(build_profile_entries(configuration, current_servers))
    entries.extend(static_entries(version))
    return entries
