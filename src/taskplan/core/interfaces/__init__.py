"""
Core Protocol Interfaces

Protocols for the collaborators the core depends on, so domain code is
written against contracts rather than concrete implementations.

Available Protocols:
    - SkillLookup: name -> SkillDefinition resolution
    - LoggerProtocol: structured logging
"""

from taskplan.core.interfaces.logging import LoggerProtocol
from taskplan.core.interfaces.skills import SkillLookup

__all__ = ["LoggerProtocol", "SkillLookup"]
