"""Definitions related to the pipeline context."""

from typing import TypeVar

Context = TypeVar("Context")
"""Context is a generic type variable representing the shared state of one pipeline run.

It can be any type. A single context instance is passed by reference to every step of a run,
including every member of a parallel group, and steps communicate only by mutating it.

The orchestrator never copies, snapshots or locks the context. Tasks that mutate shared containers
on the context concurrently (inside a parallel group) must provide their own synchronization.
"""
