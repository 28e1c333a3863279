from __future__ import annotations

Palette = dict[str, str]

PALETTE: Palette = {
    "bg": "#fff5f7",
    "surface": "#ffffff",
    "card": "#fffafb",
    "border": "#f9c6d2",
    "accent": "#e11d74",
    "accent_hover": "#be185d",
    "accent_soft": "#fbcfe8",
    "text": "#1f2937",
    "muted": "#9ca3af",
    "online": "#22c55e",
    "offline": "#9ca3af",
    "success": "#16a34a",
    "danger": "#ef4444",
    "danger_hover": "#dc2626",
}
