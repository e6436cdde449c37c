"""Format generators and registry."""

from .base import BaseFormatGenerator, GeneratorRegistryInst
from .ebook_generator import EbookGenerator
from .print_generator import PrintGenerator
from .slides_generator import SlidesGenerator
from .word_generator import WordGenerator

__all__ = [
    "BaseFormatGenerator",
    "GeneratorRegistryInst",
    "PrintGenerator",
    "WordGenerator",
    "EbookGenerator",
    "SlidesGenerator",
]
