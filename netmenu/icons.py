"""Glyph tables and the menu entry layout."""

ACTIVE_ICON = "✅"
DISABLE_ICON = "❌"
SIGNAL_ICON = "📶"
EXIT_NODE_ICON = "🌿"
SHIELD_ICON = "🛡️"
EDIT_ICON = "📶"
UNKNOWN_FLAG = "❓"

# Country names as reported by `tailscale exit-node list`
COUNTRY_FLAGS = {
    "Albania": "🇦🇱",
    "Australia": "🇦🇺",
    "Austria": "🇦🇹",
    "Belgium": "🇧🇪",
    "Brazil": "🇧🇷",
    "Bulgaria": "🇧🇬",
    "Canada": "🇨🇦",
    "Chile": "🇨🇱",
    "Colombia": "🇨🇴",
    "Croatia": "🇭🇷",
    "Czech Republic": "🇨🇿",
    "Denmark": "🇩🇰",
    "Estonia": "🇪🇪",
    "Finland": "🇫🇮",
    "France": "🇫🇷",
    "Germany": "🇩🇪",
    "Greece": "🇬🇷",
    "Hong Kong": "🇭🇰",
    "Hungary": "🇭🇺",
    "Indonesia": "🇮🇩",
    "Ireland": "🇮🇪",
    "Israel": "🇮🇱",
    "Italy": "🇮🇹",
    "Japan": "🇯🇵",
    "Latvia": "🇱🇻",
    "Mexico": "🇲🇽",
    "Netherlands": "🇳🇱",
    "New Zealand": "🇳🇿",
    "Norway": "🇳🇴",
    "Poland": "🇵🇱",
    "Portugal": "🇵🇹",
    "Romania": "🇷🇴",
    "Serbia": "🇷🇸",
    "Singapore": "🇸🇬",
    "Slovakia": "🇸🇰",
    "Slovenia": "🇸🇮",
    "South Africa": "🇿🇦",
    "Spain": "🇪🇸",
    "Sweden": "🇸🇪",
    "Switzerland": "🇨🇭",
    "Thailand": "🇹🇭",
    "Turkey": "🇹🇷",
    "UK": "🇬🇧",
    "Ukraine": "🇺🇦",
    "USA": "🇺🇸",
}


def get_flag(country):
    """Return the flag glyph for a country name, or a question mark."""
    return COUNTRY_FLAGS.get(country, UNKNOWN_FLAG)


def format_entry(column, icon, text):
    """Lay out one menu line: a padded column name, an optional icon, the text."""
    if icon:
        return f"{column:<10}- {icon} {text}"
    return f"{column:<10}- {text}"
