"""Success/failure values for the per-file steps of the pipeline.

Extraction and publishing return ``Ok``/``Err`` instead of raising, so a bad
replay or an unreachable webhook never interrupts the session.
"""

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class Ok[T]:
    value: T


@dataclass(frozen=True, slots=True)
class Err[E]:
    error: E


type Result[T, E] = Ok[T] | Err[E]
