"""Default guard set.

default.py is generated from default.guards; regenerate it after editing the
schema:

    guardset gen -i guardset/guards/default.guards -o guardset/guards/default.py
"""

from importlib import resources
from typing import Any

from ..proto.client import GuardsClient
from .default import GUARDS as GUARDS
from .default import PROGRAMS as PROGRAMS
from .default import SETTINGS_TYPES as SETTINGS_TYPES
from .default import AllowList as AllowList
from .default import BotTax as BotTax
from .default import EndSettings as EndSettings
from .default import EndSettingType as EndSettingType
from .default import Gatekeeper as Gatekeeper
from .default import Lamports as Lamports
from .default import LiveDate as LiveDate
from .default import MintLimit as MintLimit
from .default import NftPayment as NftPayment
from .default import SplToken as SplToken
from .default import ThirdPartySigner as ThirdPartySigner
from .default import Whitelist as Whitelist
from .default import WhitelistTokenMode as WhitelistTokenMode

SCHEMA_FILE = "default.guards"

DEFAULT_GUARD_NAMES: tuple[str, ...] = PROGRAMS[0].available_guards


def schema_text() -> str:
    """Return the source of the default guard schema."""
    return resources.files(__package__).joinpath(SCHEMA_FILE).read_text(encoding="utf-8")


def empty_settings() -> dict[str, Any]:
    """Settings with every default guard disabled."""
    return {name: None for name in DEFAULT_GUARD_NAMES}


def install_default_guards(client: GuardsClient) -> None:
    """Register the default program and guards on a client."""
    client.programs.register(*PROGRAMS)
    client.register(*GUARDS)


def default_client() -> GuardsClient:
    """Create a client with the default program and guards installed."""
    client = GuardsClient()
    install_default_guards(client)
    return client
