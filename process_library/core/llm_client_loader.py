"""
LLM Client Loader for building agent clients from environment variables and configuration.

Clients expose the generic interface the LLM executor drives:
- complete(prompt: str, max_tokens: int) -> str
- chat(messages: List[Dict]) -> str
"""

import os
import importlib
import warnings
from pathlib import Path
from typing import Optional, Any, Dict, List

from .exceptions import ValidationError, SecurityError
from .schema_loader import SchemaLoader


CONFIG_RELATIVE_PATH = Path(".process-library") / "config.yaml"


class OpenAIWrapper:
    def __init__(self, client: Any, model: str):
        self.client = client
        self.model = model

    def complete(self, prompt: str, max_tokens: int = 4096) -> str:
        return self.chat([{"role": "user", "content": prompt}], max_tokens=max_tokens)

    def chat(self, messages: List[Dict[str, str]], max_tokens: int = 4096) -> str:
        response = self.client.chat.completions.create(
            model=self.model,
            messages=messages,
            max_tokens=max_tokens,
        )
        return response.choices[0].message.content


class AnthropicWrapper:
    def __init__(self, client: Any, model: str):
        self.client = client
        self.model = model

    def complete(self, prompt: str, max_tokens: int = 4096) -> str:
        return self.chat([{"role": "user", "content": prompt}], max_tokens=max_tokens)

    def chat(self, messages: List[Dict[str, str]], max_tokens: int = 4096) -> str:
        system = "\n\n".join(m["content"] for m in messages if m.get("role") == "system")
        conversation = [m for m in messages if m.get("role") != "system"]
        kwargs: Dict[str, Any] = {
            "model": self.model,
            "max_tokens": max_tokens,
            "messages": conversation,
        }
        if system:
            kwargs["system"] = system
        response = self.client.messages.create(**kwargs)
        return response.content[0].text


class LLMClientLoader:
    """
    Load an LLM client from environment variables or the `llm:` config section.

    Priority: environment variables > configuration > None
    """

    def __init__(self, workspace_path: Path, llm_config: Optional[Dict[str, Any]] = None):
        """
        Args:
            workspace_path: Workspace root path
            llm_config: Pre-loaded `llm:` section; read from the config file when omitted
        """
        self.workspace_path = Path(workspace_path)
        self.config_file = self.workspace_path / CONFIG_RELATIVE_PATH
        self._llm_config = llm_config

    def load(self) -> Optional[Any]:
        """
        Returns:
            LLM client instance or None if not configured
        """
        client = self._load_from_env()
        if client:
            return client
        return self._load_from_config()

    def _load_from_env(self) -> Optional[Any]:
        model = os.getenv("LLM_MODEL")

        openai_key = os.getenv("OPENAI_API_KEY")
        if openai_key:
            return self._create_openai_client(openai_key, model=model, base_url=os.getenv("OPENAI_BASE_URL"))

        anthropic_key = os.getenv("ANTHROPIC_API_KEY")
        if anthropic_key:
            return self._create_anthropic_client(anthropic_key, model=model)

        provider = (os.getenv("LLM_PROVIDER") or "").lower()
        api_key = os.getenv("LLM_API_KEY")
        if provider and api_key:
            if provider == "openai":
                return self._create_openai_client(api_key, model=model, base_url=os.getenv("LLM_BASE_URL"))
            elif provider == "anthropic":
                return self._create_anthropic_client(api_key, model=model)

        return None

    def _config_section(self) -> Dict[str, Any]:
        if self._llm_config is not None:
            return self._llm_config
        if not self.config_file.exists():
            return {}

        try:
            return SchemaLoader.load_yaml(self.config_file).get("llm") or {}
        except (ValidationError, SecurityError) as e:
            warnings.warn(f"Failed to load LLM config from {self.config_file}: {e}")
            return {}

    def _load_from_config(self) -> Optional[Any]:
        llm_config = self._config_section()
        if not llm_config:
            return None

        provider = str(llm_config.get("provider", "")).lower()
        if provider == "custom":
            return self._create_custom_client(llm_config.get("custom", {}))

        api_key = llm_config.get("api_key") or os.getenv("OPENAI_API_KEY") or os.getenv("ANTHROPIC_API_KEY")
        if not api_key:
            return None

        model = llm_config.get("model")
        if provider == "anthropic":
            return self._create_anthropic_client(api_key, model=model)
        base_url = llm_config.get("base_url") or os.getenv("OPENAI_BASE_URL") or os.getenv("LLM_BASE_URL")
        return self._create_openai_client(api_key, model=model, base_url=base_url)

    def _create_openai_client(
        self,
        api_key: str,
        model: Optional[str] = None,
        base_url: Optional[str] = None
    ) -> Optional[Any]:
        try:
            import openai
        except ImportError:
            warnings.warn("OpenAI package not installed. Install with: pip install openai")
            return None

        client_kwargs: Dict[str, Any] = {"api_key": api_key}
        if base_url:
            client_kwargs["base_url"] = base_url
        return OpenAIWrapper(openai.OpenAI(**client_kwargs), model or "gpt-4o")

    def _create_anthropic_client(self, api_key: str, model: Optional[str] = None) -> Optional[Any]:
        try:
            import anthropic
        except ImportError:
            warnings.warn("Anthropic package not installed. Install with: pip install anthropic")
            return None

        return AnthropicWrapper(anthropic.Anthropic(api_key=api_key), model or "claude-sonnet-4-5")

    def _create_custom_client(self, custom_config: Dict[str, Any]) -> Optional[Any]:
        """Instantiate `module.class(**kwargs)` from the config"""
        module_path = custom_config.get("module")
        class_name = custom_config.get("class")
        if not module_path or not class_name:
            return None

        try:
            module = importlib.import_module(module_path)
            client_class = getattr(module, class_name)
        except (ImportError, AttributeError) as e:
            warnings.warn(f"Failed to create custom LLM client: {e}")
            return None
        return client_class(**custom_config.get("kwargs", {}))
