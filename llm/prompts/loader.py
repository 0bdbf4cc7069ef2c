"""Prompt loading and management."""

import yaml
from pathlib import Path
from typing import Dict, Any, Optional
from logger import get_logger

logger = get_logger()


class PromptManager:
    """Manages loading and rendering of prompts from YAML files."""

    def __init__(self, prompts_dir: Optional[Path] = None):
        """Initialize the prompt manager.

        Args:
            prompts_dir: Directory containing prompt YAML files.
                        Defaults to llm/prompts/ in the project.
        """
        self.prompts_dir = prompts_dir or Path(__file__).parent
        self._cache: Dict[str, Dict[str, Any]] = {}

    def load_prompt(self, prompt_name: str) -> Dict[str, Any]:
        """Load a prompt configuration from YAML file.

        Args:
            prompt_name: Name of the prompt file (without .yaml extension).

        Returns:
            Dictionary containing prompt configuration.

        Raises:
            FileNotFoundError: If prompt file doesn't exist.
            yaml.YAMLError: If YAML is invalid.
        """
        if prompt_name in self._cache:
            return self._cache[prompt_name]

        prompt_file = self.prompts_dir / f"{prompt_name}.yaml"
        if not prompt_file.exists():
            raise FileNotFoundError(f"Prompt file not found: {prompt_file}")

        logger.debug(f"Loading prompt from {prompt_file}")
        with open(prompt_file, "r") as f:
            prompt_config = yaml.safe_load(f)

        self._cache[prompt_name] = prompt_config
        return prompt_config

    def render_system_prompt(
        self, prompt_name: str, variables: Dict[str, Any], context: Optional[str] = None
    ) -> Dict[str, Any]:
        """Load a prompt and render its system prompt.

        Args:
            prompt_name: Name of the prompt to load.
            variables: Values substituted into the system prompt template.
            context: Optional key of a `contexts` entry appended to the
                system prompt (e.g. "connected" or "demo").

        Returns:
            Dictionary with keys system_prompt, parameters and version.

        Raises:
            KeyError: If the template needs a variable that wasn't given.
        """
        prompt_config = self.load_prompt(prompt_name)

        system_prompt = prompt_config.get("system_prompt", "").format(**variables)
        if context:
            extra = prompt_config.get("contexts", {}).get(context)
            if extra:
                system_prompt = f"{system_prompt.rstrip()}\n\n{extra.strip()}"

        return {
            "system_prompt": system_prompt,
            "parameters": prompt_config.get("parameters", {}),
            "version": prompt_config.get("version", "unknown"),
        }
