"""
Domain Models and Business Logic

This package contains the core domain of taskplan:
- Task tree models and schema validation
- Skill definitions, registry and reference expansion
- Config placeholder scanning
- Error taxonomy and result values
"""

from taskplan.core.domain.errors import Err, Ok, TaskplanError
from taskplan.core.domain.skill import ConfigRequirement, SkillDefinition
from taskplan.core.domain.skill_registry import SkillRegistry
from taskplan.core.domain.task import ScheduledTask, Task

__all__ = [
    "ConfigRequirement",
    "Err",
    "Ok",
    "ScheduledTask",
    "SkillDefinition",
    "SkillRegistry",
    "Task",
    "TaskplanError",
]
