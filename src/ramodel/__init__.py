"""
Model core for Reconstructability-Analysis-style model search over
categorical data.

Single access point for:
    - Variables and keys          (variables, keys)
    - Relations and caches        (relations, cache)
    - Models and their structure  (model, statespace, structure, dof)
    - Containment / equivalence   (oracle)
    - Names and tables            (naming, tables)
"""

from . import config
from . import errors
from . import variables
from . import keys
from . import relations
from . import statespace
from . import structure
from . import dof
from . import naming
from . import oracle
from . import tables
from . import cache
from . import model

from .config import *
from .errors import *
from .variables import *
from .keys import *
from .relations import *
from .statespace import *
from .structure import *
from .dof import *
from .naming import *
from .oracle import *
from .tables import *
from .cache import *
from .model import *
from .logging_config import setup_logging

__version__ = "0.1.0"
