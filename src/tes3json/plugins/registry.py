from abc import ABC, abstractmethod
from typing import Any, Dict, Optional, Type

from tes3json.core.models import ObjectSet


class PluginCodec(ABC):
    """Reads and writes binary plugin files. The format itself is the codec's business."""

    @classmethod
    @abstractmethod
    def get_name(cls) -> str:
        """e.g., 'tes3conv'"""
        pass

    @abstractmethod
    def load(self, path: str, options: Dict[str, Any]) -> ObjectSet:
        pass

    @abstractmethod
    def save(self, path: str, objects: ObjectSet, options: Dict[str, Any]) -> None:
        pass


class PluginRegistry:
    _codecs: Dict[str, Type[PluginCodec]] = {}

    @classmethod
    def register_codec(cls, codec_cls: Type[PluginCodec]) -> None:
        cls._codecs[codec_cls.get_name().lower()] = codec_cls

    @classmethod
    def unregister_codec(cls, name: str) -> None:
        cls._codecs.pop(name.lower(), None)

    @classmethod
    def get_codec(cls, name: str) -> Optional[Type[PluginCodec]]:
        return cls._codecs.get(name.lower())

    @classmethod
    def available_codecs(cls) -> list[str]:
        return sorted(cls._codecs.keys())
