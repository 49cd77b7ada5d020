"""Guard schema parser and code generator."""

from .parser import ValidationError as ValidationError
from .parser import parse as parse
from .python import load as load
from .python import render as render
from .sizes import GuardSizeInfo as GuardSizeInfo
from .sizes import ProgramSizeInfo as ProgramSizeInfo
from .sizes import SchemaSizeInfo as SchemaSizeInfo
from .sizes import SizeCalculator as SizeCalculator
from .sizes import SizeInfo as SizeInfo
from .sizes import SizeKind as SizeKind
from .sizes import calculate_sizes as calculate_sizes
from .types import *
