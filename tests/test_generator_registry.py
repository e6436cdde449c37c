import pytest

from mdexport.domain.interfaces import IFormatGenerator
from mdexport.domain.models import ExportFormat
from mdexport.services.generators import (
    EbookGenerator,
    GeneratorRegistryInst,
    PrintGenerator,
    SlidesGenerator,
    WordGenerator,
)


def test_register_and_lookup_by_enum_or_string():
    reg = GeneratorRegistryInst()
    word = WordGenerator()
    reg.register(word)
    assert reg.get(ExportFormat.WORD) is word
    assert reg.get("word") is word
    assert reg.all() == [word]


def test_missing_format_raises_key_error():
    reg = GeneratorRegistryInst()
    with pytest.raises(KeyError):
        reg.get(ExportFormat.SLIDES)


def test_registering_same_format_replaces():
    reg = GeneratorRegistryInst()
    a, b = EbookGenerator(), EbookGenerator()
    reg.register(a)
    reg.register(b)
    assert reg.get("ebook") is b
    assert len(reg.all()) == 1


def test_builtin_generator_metadata():
    gens = [PrintGenerator(), WordGenerator(), EbookGenerator(), SlidesGenerator()]
    assert all(isinstance(g, IFormatGenerator) for g in gens)
    assert {g.format for g in gens} == set(ExportFormat)
    assert [g.uses_styling_phase for g in gens] == [True, False, False, False]
    assert WordGenerator.extension == ".doc"
    assert WordGenerator.mime_type == "application/msword"
    assert all(g.success_message for g in gens)
