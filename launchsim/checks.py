"""Runtime type checking shared by the package.

``typechecked`` is :func:`beartype.beartype` configured with the PEP 484
numeric tower, so an ``int`` is accepted wherever ``float`` is annotated
(stage masses and thrusts are commonly written as integers).
"""

from beartype import BeartypeConf, beartype

typechecked = beartype(conf=BeartypeConf(is_pep484_tower=True))

__all__ = ["typechecked"]
