"""Shared test fixtures for skillcorpus test suite."""

import logging
from pathlib import Path
from typing import Callable

import pytest

from skillcorpus.core.context import SharedContext
from skillcorpus.utils.config import Config

VALID_SKILL = """---
name: {skill_id}
description: Audit Solidity contracts for reentrancy
version: 1.2.0
bonded_agent: security-auditor
parameters:
  - name: severity
    type: enum
    enum: [low, medium, high]
    default: medium
    examples: [high]
  - name: contract_path
    type: string
    required: true
retry_config:
  max_attempts: 2
  backoff: linear
logging:
  level: info
---

# Reentrancy Audit

Check every external call.

```solidity
function withdraw() external {{
    msg.sender.call{{value: 1}}("");
}}
```

## Changelog

| Version | Date | Changes |
|---------|------|---------|
| 1.2.0 | 2024-05-01 | Added enum parameter |
| 1.0.0 | 2024-01-10 | Initial version |
"""


@pytest.fixture
def test_config(tmp_path: Path) -> Config:
    """Config with root pointing to tmp_path."""
    return Config(root=tmp_path)


@pytest.fixture
def skills_dir(test_config: Config) -> Path:
    """Empty skills directory inside the test corpus."""
    test_config.skills_path.mkdir(parents=True, exist_ok=True)
    return test_config.skills_path


@pytest.fixture
def write_skill(skills_dir: Path) -> Callable[..., Path]:
    """Factory writing {skill_id}/{skill_id}-skill.md, optionally under a group folder."""

    def _write(skill_id: str, content: str | None = None, group: str | None = None) -> Path:
        base = skills_dir / group if group else skills_dir
        skill_dir = base / skill_id
        skill_dir.mkdir(parents=True, exist_ok=True)
        skill_file = skill_dir / f"{skill_id}-skill.md"
        text = content if content is not None else VALID_SKILL.format(skill_id=skill_id)
        skill_file.write_text(text)
        return skill_file

    return _write


@pytest.fixture
def test_context(test_config: Config) -> SharedContext:
    """SharedContext with test config."""
    return SharedContext(config=test_config)


@pytest.fixture(autouse=True)
def reset_logging():
    """Drop handlers installed by setup_logging so they don't outlive tmp dirs."""
    yield
    logger = logging.getLogger("skillcorpus")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
