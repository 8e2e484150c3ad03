"""
Unit tests for netmenu/normalizer.py and netmenu/icons.py
"""

import pytest

from netmenu.models import ApplyRecipe, BackendOption, ShellRecipe, Source


@pytest.mark.unit
class TestNormalizeOption:
    """Tests for normalize_option."""

    def test_mullvad_option_gets_country_flag(self):
        from netmenu.normalizer import normalize_option

        opt = BackendOption(
            identifier="se-got-wg-001.mullvad.ts.net",
            label="Sweden - se-got-wg-001.mullvad.ts.net",
            kind="mullvad",
            country="Sweden",
        )

        action = normalize_option(opt, Source.VPN_EXIT_NODE, "tailscale")

        assert action.display == "mullvad   - 🇸🇪 Sweden - se-got-wg-001.mullvad.ts.net"
        assert action.recipe == ApplyRecipe("tailscale", "se-got-wg-001.mullvad.ts.net")
        assert action.source is Source.VPN_EXIT_NODE
        assert not action.is_active

    def test_unknown_country_gets_question_mark(self):
        from netmenu.normalizer import normalize_option

        opt = BackendOption(identifier="n", label="Atlantis", kind="mullvad", country="Atlantis")

        assert "❓" in normalize_option(opt, Source.VPN_EXIT_NODE, "tailscale").display

    def test_active_option_is_checked(self):
        from netmenu.normalizer import normalize_option

        opt = BackendOption(
            identifier="n", label="Sweden", kind="mullvad", country="Sweden", is_active=True
        )

        action = normalize_option(opt, Source.VPN_EXIT_NODE, "tailscale")

        assert action.display == "mullvad   - ✅ Sweden"
        assert action.is_active

    def test_option_without_icon(self):
        from netmenu.normalizer import normalize_option

        opt = BackendOption(identifier="AA:BB", label="Headset", kind="bluetooth")

        action = normalize_option(opt, Source.BLUETOOTH_DEVICE, "bluetooth")

        assert action.display == "bluetooth - Headset"
        assert action.label == "Headset"

    def test_line_breaks_in_label_are_flattened(self):
        from netmenu.normalizer import normalize_option

        opt = BackendOption(identifier="odd\nssid", label="odd\nssid - ▂___", kind="wifi")

        action = normalize_option(opt, Source.WIFI_NETWORK, "networkmanager")

        assert action.display == "wifi      - odd ssid - ▂___"
        assert action.recipe.target == "odd\nssid"

    def test_normalization_is_deterministic(self):
        from netmenu.normalizer import normalize_option

        opt = BackendOption(identifier="home", label="home - ▂▄__", kind="wifi", icon="📶")

        first = normalize_option(opt, Source.WIFI_NETWORK, "networkmanager")
        second = normalize_option(opt, Source.WIFI_NETWORK, "networkmanager")

        assert first == second


@pytest.mark.unit
class TestStaticActions:
    """Tests for the static action source."""

    def test_preserves_order_and_commands(self, make_config):
        from netmenu.normalizer import static_actions

        cfg = make_config(actions=[("B", "echo b"), ("A", "echo 'a'")])

        actions = static_actions(cfg)

        assert [a.label for a in actions] == ["B", "A"]
        assert [a.recipe for a in actions] == [ShellRecipe("echo b"), ShellRecipe("echo 'a'")]
        assert all(a.source is Source.STATIC for a in actions)
        assert actions[0].display == "action    - B"


@pytest.mark.unit
class TestIcons:
    """Tests for glyph lookups and entry layout."""

    def test_format_entry_with_icon(self):
        from netmenu.icons import format_entry

        assert format_entry("wifi", "📶", "home") == "wifi      - 📶 home"

    def test_format_entry_without_icon(self):
        from netmenu.icons import format_entry

        assert format_entry("action", "", "Lock") == "action    - Lock"

    def test_get_flag(self):
        from netmenu.icons import get_flag

        assert get_flag("USA") == "🇺🇸"
        assert get_flag("Nowhere") == "❓"
