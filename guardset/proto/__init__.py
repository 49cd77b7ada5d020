"""Guardset runtime: guard registry and settings codec."""

from .client import DEFAULT_PROGRAM as DEFAULT_PROGRAM
from .client import GuardsClient as GuardsClient
from .flags import pack_flags as pack_flags
from .flags import unpack_flags as unpack_flags
from .groups import GroupCodec as GroupCodec
from .programs import ProgramRegistry as ProgramRegistry
from .programs import UnregisteredProgramError as UnregisteredProgramError
from .registry import GuardRegistry as GuardRegistry
from .registry import UnregisteredGuardError as UnregisteredGuardError
from .serialization import GuardEnum as GuardEnum
from .serialization import GuardSettings as GuardSettings
from .serialization import MalformedPresenceFlagError as MalformedPresenceFlagError
from .serialization import SerializationError as SerializationError
from .serialization import TruncatedBufferError as TruncatedBufferError
from .serialization import require as require
from .serialization import settings_field as settings_field
from .settings import SettingsCodec as SettingsCodec
from .types import DecodedGuards as DecodedGuards
from .types import GuardDescriptor as GuardDescriptor
from .types import PresenceFormat as PresenceFormat
from .types import ProgramDescriptor as ProgramDescriptor
