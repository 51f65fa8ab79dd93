"""
Standin Testing - helpers for tests written against the data layer.

Provides:
- FaultRecorder / CapturedFault: capture and inspect raised faults
- pytest fixtures (``standin.testing.fixtures``): standin_db,
  standin_schema, fault_recorder
"""

from .faults import CapturedFault, FaultRecorder

__all__ = ["CapturedFault", "FaultRecorder"]
