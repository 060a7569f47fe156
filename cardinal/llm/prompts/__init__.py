"""
Prompt Management Module

Loads and caches LLM prompt templates from the .txt files next to this module,
so prompt wording can change without touching the services that use them.
"""

from __future__ import annotations

from pathlib import Path

PROMPTS_DIR = Path(__file__).parent


class PromptLoader:
    """Load and cache prompt templates from files"""

    def __init__(self, prompts_dir: Path = PROMPTS_DIR):
        self._prompts_dir = prompts_dir
        self._cache: dict[str, str] = {}

    def load_prompt(self, prompt_name: str) -> str:
        """
        Load a prompt template from file.

        Args:
            prompt_name: Name of the prompt file (without .txt extension)

        Returns:
            Prompt template string
        """
        if prompt_name not in self._cache:
            prompt_path = self._prompts_dir / f"{prompt_name}.txt"

            if not prompt_path.exists():
                raise FileNotFoundError(f"Prompt file not found: {prompt_path}")

            with open(prompt_path, encoding="utf-8") as f:
                self._cache[prompt_name] = f.read()

        return self._cache[prompt_name]

    def render(self, prompt_name: str, **kwargs: object) -> str:
        """Load a prompt and inject variables with str.format."""
        return self.load_prompt(prompt_name).format(**kwargs)

    def reload(self) -> None:
        """Clear cache and reload prompts from disk"""
        self._cache.clear()


# Global instance
_loader = PromptLoader()


def get_yard_photo_prompt() -> str:
    return _loader.load_prompt("yard_photo")


def get_yard_text_prompt(**kwargs: object) -> str:
    return _loader.render("yard_text", **kwargs)


def get_sales_script_prompt(**kwargs: object) -> str:
    return _loader.render("sales_script", **kwargs)


def get_job_intel_prompt(**kwargs: object) -> str:
    return _loader.render("job_intel", **kwargs)
