"""
Identifier casing conversions.

The four converters are pure functions: they split an arbitrary identifier into
words (camel humps, acronyms, digits and any non-alphanumeric separator all
delimit words) and re-join the words in the requested style.

    to_snake_case("EmployeeJobs")        -> "employee_jobs"
    to_screaming_snake_case("cityCode")  -> "CITY_CODE"
    to_camel_case("employee_jobs")       -> "employeeJobs"
    to_pascal_case("HTTPServer")         -> "HttpServer"
"""

import re
from enum import Enum

_SEPARATORS = re.compile(r"[^A-Za-z0-9]+")
_WORDS = re.compile(r"[A-Z]+(?=[A-Z][a-z])|[A-Z]?[a-z0-9]+|[A-Z]+[0-9]*")


def split_words(name: str) -> list[str]:
    """Split an identifier into its words, preserving their original case."""
    words = []
    for chunk in _SEPARATORS.split(name or ""):
        words.extend(_WORDS.findall(chunk))
    return words


def _capitalize(word: str) -> str:
    return word[:1].upper() + word[1:].lower()


def to_snake_case(name: str) -> str:
    return "_".join(w.lower() for w in split_words(name))


def to_screaming_snake_case(name: str) -> str:
    return "_".join(w.upper() for w in split_words(name))


def to_camel_case(name: str) -> str:
    words = split_words(name)
    if not words:
        return ""
    return words[0].lower() + "".join(_capitalize(w) for w in words[1:])


def to_pascal_case(name: str) -> str:
    return "".join(_capitalize(w) for w in split_words(name))


class NamingStyle(str, Enum):
    """Closed set of naming styles usable in a dialect profile."""

    SNAKE_CASE = "snake_case"
    SCREAMING_SNAKE_CASE = "SCREAMING_SNAKE_CASE"
    CAMEL_CASE = "camelCase"
    PASCAL_CASE = "PascalCase"

    @classmethod
    def parse(cls, value: str) -> "NamingStyle":
        """
        Resolve a configuration tag to a style.

        Raises:
            ValueError: unknown tag (callers turn it into a ConfigurationError)
        """
        tag = (value or "").strip()
        tag = _LEGACY_ALIASES.get(tag, tag)
        try:
            return cls(tag)
        except ValueError:
            known = ", ".join(s.value for s in cls)
            raise ValueError(f"Unknown naming style '{value}' (expected one of: {known})") from None

    def apply(self, name: str) -> str:
        return _CONVERTERS[self](name)


_LEGACY_ALIASES = {
    "ANACONDA_CASE": NamingStyle.SCREAMING_SNAKE_CASE.value,
}

_CONVERTERS = {
    NamingStyle.SNAKE_CASE: to_snake_case,
    NamingStyle.SCREAMING_SNAKE_CASE: to_screaming_snake_case,
    NamingStyle.CAMEL_CASE: to_camel_case,
    NamingStyle.PASCAL_CASE: to_pascal_case,
}
