"""
Language backends.

Each backend implements the four‑stage ``Interpreter`` contract from
``base.py``: fetch the snippet, add boilerplate, build, execute.  The
launcher picks one through the registry based on the buffer's filetype.
New languages are added by subclassing ``Interpreter`` and listing the
class in :data:`INTERPRETERS`.
"""

from .base import Interpreter, ProcessOutput
from .bash_original import BashOriginal
from .python_original import PythonOriginal
from .rust_original import RustOriginal

INTERPRETERS = (RustOriginal, PythonOriginal, BashOriginal)

__all__ = [
    "Interpreter",
    "ProcessOutput",
    "RustOriginal",
    "PythonOriginal",
    "BashOriginal",
    "INTERPRETERS",
]
