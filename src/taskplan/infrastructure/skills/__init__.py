"""
Skill Infrastructure Components

This package provides infrastructure implementations for skills:
- parse_skill_markdown: Parse skill markdown files into SkillDefinition objects
- SkillLoader: Load skill files from the skills directory
- create_skill_registry: Build a SkillRegistry from a directory
"""

from taskplan.infrastructure.skills.skill_loader import SkillLoader, create_skill_registry
from taskplan.infrastructure.skills.skill_parser import parse_skill_markdown

__all__ = [
    "parse_skill_markdown",
    "SkillLoader",
    "create_skill_registry",
]
