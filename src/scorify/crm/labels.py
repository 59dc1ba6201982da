"""Display labels for stored enum values (Indonesian UI)."""

from __future__ import annotations

TRANSLATIONS: dict[str, str] = {
    "pending": "Tertunda",
    "agreed": "Disetujui",
    "declined": "Ditolak",
    "success": "Berhasil",
    "failure": "Gagal",
    "no_answer": "Tidak Dijawab",
    "unknown": "Tidak Diketahui",
    "nonexistent": "Tidak Ada",
}

INTERACTION_TYPE_LABELS: dict[str, str] = {
    "PANGGILAN_TELEPON": "Panggilan Telepon",
    "CATATAN_INTERNAL": "Catatan Internal",
}


def translate_value(value: str | None) -> str:
    """Translate a stored value; unmapped values pass through, empty is "-"."""
    if not value:
        return "-"
    return TRANSLATIONS.get(value.lower(), value)


def format_enum_value(value: str | None) -> str:
    """Humanize a snake_case enum value: "blue_collar" -> "Blue Collar"."""
    if not value:
        return "-"
    return " ".join(word.capitalize() for word in value.split("_"))
