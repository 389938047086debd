#!/usr/bin/env python3
from dataclasses import dataclass

# =========================
# Supported languages
# =========================

# Locales whose upper-case dotted/dotless I do not lower-case the ASCII way.
_TURKIC_LOCALES = ("tr", "az")


@dataclass(frozen=True)
class Language:
    code: str
    name: str

    @property
    def dictionary_file_name(self) -> str:
        return f"dictionary.{self.code}.txt"

    @property
    def trie_file_name(self) -> str:
        return f"words_{self.code}.bin"

    def lower(self, text: str) -> str:
        """Lower-case `text` following this language's locale rules."""
        if self.code.split("_")[0] in _TURKIC_LOCALES:
            text = text.replace("I", "ı").replace("İ", "i")
        return text.lower()

    def __str__(self):
        return self.name


LANGUAGES = {
    lang.code: lang
    for lang in (
        Language("ca", "Catalan"),
        Language("cs", "Czech"),
        Language("de_DE", "German"),
        Language("en_GB", "English (GB)"),
        Language("en_US", "English (US)"),
        Language("es", "Spanish"),
        Language("fa", "Persian"),
        Language("fr_FR", "French"),
        Language("hu", "Hungarian"),
        Language("it", "Italian"),
        Language("ja", "Japanese"),
        Language("nl", "Dutch"),
        Language("pl", "Polish"),
        Language("pt_BR", "Portuguese (BR)"),
        Language("ru", "Russian"),
        Language("sv", "Swedish"),
        Language("tr", "Turkish"),
        Language("uk", "Ukrainian"),
    )
}


def language_from_code(code: str) -> Language:
    """Known languages come from the registry, anything else gets its code as its name."""
    return LANGUAGES.get(code, Language(code, code))
