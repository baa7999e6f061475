"""Configuration and documentation files probed for analysis context.

Order matters twice: keys are probed (and rendered into the prompt) in the
order below, and within a key the first existing candidate wins.
"""

from __future__ import annotations

from typing import NamedTuple, Tuple


class ImportantFileSpec(NamedTuple):
    key: str
    label: str
    candidates: Tuple[str, ...]
    budget: int  # max characters quoted in the prompt


IMPORTANT_FILES: Tuple[ImportantFileSpec, ...] = (
    ImportantFileSpec("readme", "README.md Content", ("README.md", "readme.md", "README.MD"), 1000),
    ImportantFileSpec("packageJson", "Package.json Content", ("package.json",), 800),
    ImportantFileSpec("contributing", "CONTRIBUTING.md Content", ("CONTRIBUTING.md", "contributing.md"), 600),
    ImportantFileSpec(
        "ciConfig",
        "CI/CD Configuration",
        (
            ".github/workflows/ci.yml",
            ".github/workflows/ci.yaml",
            ".github/workflows/build.yml",
            ".github/workflows/build.yaml",
            ".travis.yml",
            ".circleci/config.yml",
        ),
        600,
    ),
    ImportantFileSpec("requirements", "Requirements.txt Content", ("requirements.txt", "requirements-dev.txt"), 400),
    ImportantFileSpec("pomXml", "POM.xml Content", ("pom.xml",), 800),
    ImportantFileSpec("gradle", "Gradle Configuration", ("build.gradle", "build.gradle.kts"), 600),
    ImportantFileSpec("cargo", "Cargo.toml Content", ("Cargo.toml",), 600),
    ImportantFileSpec("composer", "Composer.json Content", ("composer.json",), 600),
    ImportantFileSpec("gemfile", "Gemfile Content", ("Gemfile", "Gemfile.lock"), 600),
    ImportantFileSpec("goMod", "Go.mod Content", ("go.mod",), 600),
    ImportantFileSpec("pyproject", "PyProject.toml Content", ("pyproject.toml",), 600),
)
