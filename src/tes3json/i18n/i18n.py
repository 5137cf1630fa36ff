import json
import logging
from pathlib import Path
from typing import Dict

logger = logging.getLogger(__name__)

DEFAULT_LOCALE = "en-US"


class I18nManager:
    """Message catalogue for CLI output."""
    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super(I18nManager, cls).__new__(cls)
            cls._instance._init()
        return cls._instance

    def _init(self) -> None:
        self.locale = DEFAULT_LOCALE
        self.locales_dir = Path(__file__).parent.parent / "locales"
        self.strings: Dict[str, Dict[str, str]] = {}
        self._load_all()

    def _load_all(self) -> None:
        if not self.locales_dir.exists():
            return
        for file in self.locales_dir.glob("*.json"):
            try:
                self.strings[file.stem] = json.loads(file.read_text(encoding="utf-8"))
            except (OSError, ValueError) as e:
                logger.warning("Failed to load locale %s: %s", file, e)

    def set_locale(self, locale: str) -> None:
        if locale not in self.strings:
            logger.debug("Unknown locale %s, falling back to %s", locale, DEFAULT_LOCALE)
        self.locale = locale

    def get_available_locales(self) -> list[str]:
        return sorted(self.strings.keys())

    def t(self, key: str) -> str:
        """Translate key to current locale, fallback to en-US, then to the key itself."""
        if self.locale in self.strings and key in self.strings[self.locale]:
            return self.strings[self.locale][key]
        if DEFAULT_LOCALE in self.strings and key in self.strings[DEFAULT_LOCALE]:
            return self.strings[DEFAULT_LOCALE][key]
        return key

i18n = I18nManager()
