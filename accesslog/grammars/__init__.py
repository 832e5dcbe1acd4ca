# Grammars are registered here, not on import of their modules:
# registration order is the detection tie-break order.
from .base import (
    REGISTRY as REGISTRY,
)
from .base import (
    Grammar as Grammar,
)
from .base import (
    all_grammars as all_grammars,
)
from .base import (
    get_grammar as get_grammar,
)
from .base import (
    register as register,
)
from .combined import CombinedGrammar
from .common import CommonGrammar
from .securepoint import SecurepointGrammar

register(SecurepointGrammar())
register(CombinedGrammar())
register(CommonGrammar())

__all__ = [
    "REGISTRY",
    "CombinedGrammar",
    "CommonGrammar",
    "Grammar",
    "SecurepointGrammar",
    "all_grammars",
    "get_grammar",
    "register",
]
