"""Family composition labels and household size estimation."""

from dataclasses import dataclass

OTHER_LABEL = "その他"
DEFAULT_FAMILY_SIZE = 2

# Priority order matters: first substring match wins.
FAMILY_SIZES: dict[str, int] = {
    "単身": 1,
    "夫婦2人": 2,
    "夫婦+子1人": 3,
    "夫婦+子2人": 4,
    "夫婦+子3人": 5,
}

FAMILY_CHOICES: list[str] = [*FAMILY_SIZES, OTHER_LABEL]


@dataclass(frozen=True)
class Household:
    """Family composition: a preset label or その他 with an explicit size."""

    label: str
    size: int
    custom: bool = False

    @classmethod
    def preset(cls, label: str) -> "Household":
        if label not in FAMILY_SIZES:
            raise ValueError(f"未対応の家族構成: {label}")
        return cls(label=label, size=FAMILY_SIZES[label])

    @classmethod
    def other(cls, size: int) -> "Household":
        if size < 1:
            raise ValueError(f"家族の人数は1人以上: {size}")
        return cls(label=OTHER_LABEL, size=size, custom=True)

    @classmethod
    def from_label(cls, label: str) -> "Household":
        """Preset label → preset; any other free-form label keeps substring-based sizing."""
        if label in FAMILY_SIZES:
            return cls.preset(label)
        return cls(label=label, size=estimate_family_size(label))

    @property
    def has_children(self) -> bool:
        return "子" in self.label

    def display_label(self) -> str:
        if self.custom:
            return f"{self.label}（{self.size}人）"
        return self.label


def estimate_family_size(label: str | None) -> int:
    """Estimate household size from a free-form label.

    "その他:5" → 5 (non-numeric or < 1 → 2). Otherwise case-insensitive
    substring match against FAMILY_SIZES in priority order; unknown → 2.
    """
    if not label:
        return DEFAULT_FAMILY_SIZE
    if label.startswith(OTHER_LABEL) and ":" in label:
        num_part = label.split(":", 1)[1].strip()
        try:
            size = int(num_part)
        except ValueError:
            return DEFAULT_FAMILY_SIZE
        return size if size >= 1 else DEFAULT_FAMILY_SIZE
    lower = label.lower()
    for key, size in FAMILY_SIZES.items():
        if key in lower:
            return size
    return DEFAULT_FAMILY_SIZE


def resolve_family_size(family: "Household | str | None") -> int:
    """Household → its explicit size; label string / None → estimate_family_size()."""
    if isinstance(family, Household):
        return family.size
    return estimate_family_size(family)
