from skillcorpus.core.lint import Linter
from skillcorpus.core.skill_loader import SkillLoader
from skillcorpus.utils.config import Config


class SharedContext:
    """Global shared state for the application."""

    config: Config
    skill_loader: SkillLoader
    linter: Linter

    def __init__(self, config: Config):
        self.config = config
        self.skill_loader = SkillLoader.from_config(config)
        self.linter = Linter(config)
