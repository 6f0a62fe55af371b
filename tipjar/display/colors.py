"""Color scheme for tipjar."""

from rich.theme import Theme

# Color palette
COLORS = {
    "primary": "#3B82F6",      # Blue (action buttons, prompts)
    "success": "#10B981",      # Green
    "warning": "#F59E0B",      # Amber
    "error": "#EF4444",        # Red
    "muted": "#6B7280",        # Gray (tip borders)
    "accent": "#A78BFA",       # Violet (tip titles)
}

# Rich theme for console
TIPJAR_THEME = Theme({
    "info": COLORS["primary"],
    "success": COLORS["success"],
    "warning": COLORS["warning"],
    "error": COLORS["error"],
    "muted": COLORS["muted"],
})
