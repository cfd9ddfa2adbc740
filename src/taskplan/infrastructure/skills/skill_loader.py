"""
Skill Loader

Loads skill markdown files from the per-user skills directory. Each
``*.md`` file is one skill; the file stem is its key.

Skills Directory Structure:
    ~/.taskplan/skills/
    ├── build-project.md
    └── navigate-to-project.md
"""

from collections.abc import Iterator
from pathlib import Path

import structlog

from taskplan.core.domain.skill import SkillDefinition
from taskplan.core.domain.skill_registry import SkillRegistry
from taskplan.core.utils.paths import get_skills_directory
from taskplan.infrastructure.skills.skill_parser import parse_skill_markdown

logger = structlog.get_logger(__name__)


class SkillLoader:
    """
    Reads and parses skill files from one directory.

    Files are processed in name order so duplicate display names resolve
    deterministically (the last file wins in the registry).
    """

    SKILL_SUFFIXES = (".md", ".MD")

    def __init__(self, directory: str | Path | None = None):
        """
        Initialize the skill loader.

        Args:
            directory: Directory holding skill files. If None, uses the
                       default per-user skills directory.
        """
        self._directory = Path(directory).expanduser() if directory else get_skills_directory()

    @property
    def directory(self) -> Path:
        return self._directory

    def discover_skill_files(self) -> Iterator[Path]:
        """Yield skill files in the directory, sorted by name."""
        if not self._directory.is_dir():
            logger.debug("skill.directory_not_found", directory=str(self._directory))
            return
        for path in sorted(self._directory.iterdir()):
            if path.is_file() and path.suffix in self.SKILL_SUFFIXES:
                yield path

    def load_contents(self) -> dict[str, str]:
        """
        Read every skill file.

        Returns:
            Mapping of skill key (file stem) to markdown content. Unreadable
            files are logged and skipped.
        """
        contents: dict[str, str] = {}
        for path in self.discover_skill_files():
            try:
                contents[path.stem] = path.read_text(encoding="utf-8")
            except (OSError, UnicodeDecodeError) as e:
                logger.warning("skill.file_read_error", skill_file=str(path), error=str(e))
        return contents

    def load_definitions(self) -> list[SkillDefinition]:
        """Parse all skill files, including invalid ones."""
        definitions: list[SkillDefinition] = []
        for key, content in self.load_contents().items():
            definition = parse_skill_markdown(key, content)
            if not definition.is_valid:
                logger.warning(
                    "skill.invalid",
                    skill_key=key,
                    error=definition.validation_error,
                )
            definitions.append(definition)
        logger.debug("skill.loaded", count=len(definitions), directory=str(self._directory))
        return definitions


def create_skill_registry(directory: str | Path | None = None) -> SkillRegistry:
    """
    Build a SkillRegistry from a skills directory.

    Args:
        directory: Skills directory; defaults to the per-user one

    Returns:
        Registry populated with every parsed skill
    """
    return SkillRegistry(SkillLoader(directory).load_definitions())
