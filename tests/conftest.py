"""
Shared pytest fixtures for praxis tests.

This module provides:
- A temporary praxis project (roles, responsibilities, constitution,
  context and reference documents, README specifications, config)
- structlog reset between tests so CLI invocations never leak a closed
  output stream into later tests

Usage:
    def test_compile(praxis_project):
        compiler = RoleCompiler(praxis_project)
"""

from __future__ import annotations

import json
from pathlib import Path

import pytest
import structlog


ROLE_DOC = """---
alias: Tester
description: Ensures code quality through testing
responsibilities:
  - content/responsibilities/write-tests.md
constitution: content/context/constitution/*.md
context:
  - content/context/conventions/naming.md
refs:
  - content/reference/g*.md
---
# Tester

A test role for unit testing
"""

RESPONSIBILITY_DOC = """---
type: responsibility
owner: Tester
---
Write unit tests for every change.
"""

CONSTITUTION_DOC = """---
type: constitution
---
Never ship untested code.
"""

NAMING_DOC = """---
type: convention
---
Use kebab-case file names.
"""

REFERENCE_DOC = """# Glossary

Terms used across the project.
"""

ROLES_README = """# Roles

Every role must declare `alias` and `description` front-matter.
"""


def write(path: Path, content: str) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")
    return path


@pytest.fixture(autouse=True)
def reset_structlog():
    """Restore structlog defaults after every test."""
    yield
    structlog.reset_defaults()


@pytest.fixture
def praxis_project(tmp_path: Path) -> Path:
    """A complete praxis project rooted at a temporary directory."""
    content = tmp_path / "content"
    write(content / "roles" / "test-role.md", ROLE_DOC)
    write(content / "roles" / "README.md", ROLES_README)
    write(content / "roles" / "_template.md", "---\nalias: Template\n---\nTemplate body\n")
    write(content / "responsibilities" / "write-tests.md", RESPONSIBILITY_DOC)
    write(content / "responsibilities" / "README.md", "# Responsibilities\n\nOne task per file.\n")
    write(content / "context" / "constitution" / "quality.md", CONSTITUTION_DOC)
    write(content / "context" / "conventions" / "naming.md", NAMING_DOC)
    write(content / "context" / "README.md", "# Context\n\nShared context.\n")
    write(content / "reference" / "glossary.md", REFERENCE_DOC)
    write(content / "reference" / "README.md", "# Reference\n\nReference material.\n")
    write(
        tmp_path / ".praxis" / "config.json",
        json.dumps({"plugins": ["claude-code"]}),
    )
    return tmp_path


@pytest.fixture
def write_file():
    """Write a file (creating parents) and return its path."""
    return write
