"""Summary tones and the style instruction each one sends to the model."""

from enum import Enum


class Tone(Enum):
    """Style the summary should be written in."""

    BALANCED = "balanced"
    SCIENTIFIC = "scientific"
    CONCISE = "concise"
    CREATIVE = "creative"
    BULLET_POINTS = "bulletPoints"

    @property
    def display_name(self) -> str:
        return _DISPLAY_NAMES[self]

    @property
    def instruction(self) -> str:
        return _INSTRUCTIONS[self]

    @property
    def color(self) -> str:
        return _COLORS[self]

    @classmethod
    def parse(cls, value: "str | Tone") -> "Tone":
        """Look up a tone by value or name, ignoring case and separators.

        Raises:
            ValueError: If no tone matches.
        """
        if isinstance(value, cls):
            return value
        key = str(value).strip().lower().replace("_", "").replace("-", "").replace(" ", "")
        for tone in cls:
            if key in (tone.value.lower(), tone.name.lower().replace("_", "")):
                return tone
        valid = ", ".join(tone.value for tone in cls)
        raise ValueError(f"Unknown tone {value!r} (expected one of: {valid})")


DEFAULT_TONE = Tone.BALANCED

_DISPLAY_NAMES = {
    Tone.BALANCED: "Balanced",
    Tone.SCIENTIFIC: "Scientific",
    Tone.CONCISE: "Concise",
    Tone.CREATIVE: "Creative",
    Tone.BULLET_POINTS: "Bullet points",
}

_COLORS = {
    Tone.BALANCED: "blue",
    Tone.SCIENTIFIC: "red",
    Tone.CONCISE: "cyan",
    Tone.CREATIVE: "purple",
    Tone.BULLET_POINTS: "green",
}

# Scientific keeps mechanisms, methods and limitations; balanced keeps the
# seriousness of the original; concise drops detail but never whole ideas;
# creative keeps the emotional register; bullet points is one idea per bullet.
_INSTRUCTIONS = {
    Tone.BALANCED: (
        "Write a clear, neutral summary that preserves all important facts "
        "and the seriousness of any risks, ethical dilemmas, or emotional stakes. "
        "Do not oversimplify. Keep the main structure of the original argument while "
        "making it easier to read."
    ),
    Tone.SCIENTIFIC: (
        "Write a precise, formal summary using scientific or academic language. "
        "Preserve mechanistic details, key definitions, abbreviations, methods, "
        "biomarkers, and limitations. Highlight the main findings and any open questions. "
        "Avoid jokes, slang, or casual tone."
    ),
    Tone.CONCISE: (
        "Write the shortest possible summary that still preserves all distinct ideas "
        "and concerns. Remove examples, repetition, and minor details, but do not drop "
        "entire categories of meaning. Prioritize brevity over style."
    ),
    Tone.CREATIVE: (
        "Write an engaging, narrative-style summary that keeps the emotional tone "
        "and personality of the original text. You may lightly rephrase for flow, "
        "but keep all important facts accurate and do not invent new events or details."
    ),
    Tone.BULLET_POINTS: (
        "Write the summary as a list of structured bullet points. "
        "Each bullet should contain one key idea. "
        "Preserve important technical, ethical, or emotional nuances. "
        "Do not write long paragraphs."
    ),
}


def instruction_for(tone: Tone) -> str:
    """Return the style directive sent to the backend for ``tone``."""
    return tone.instruction


def display_name_for(tone: Tone) -> str:
    """Return the human-readable name of ``tone``."""
    return tone.display_name


def color_for(tone: Tone) -> str:
    """Return the tint color associated with ``tone``."""
    return tone.color
