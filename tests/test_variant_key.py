"""Tests for variant keys and variant-aware duplicate detection."""

from grocery_identity.variant_key import KEY_SEPARATOR, is_duplicate_item, variant_key


class TestVariantKey:
    """Tests for variant_key."""

    def test_size_spacing(self):
        """Whitespace inside the size does not matter."""
        assert variant_key("Roasted Cashews", "180g") == variant_key("Roasted Cashews", "180 g")

    def test_plural_names_collapse(self):
        """Singular and plural names share a key."""
        assert variant_key("cashews", "180g") == variant_key("cashew", "180g")

    def test_different_sizes(self):
        """Different pack sizes never share a key."""
        assert variant_key("Cashews", "180g") != variant_key("Cashews", "500g")

    def test_case_insensitive(self):
        """Name and size case are ignored."""
        assert variant_key("MILK", "2pt") == variant_key("milk", "2pt")
        assert variant_key("Milk", "2PT") == variant_key("Milk", "2pt")

    def test_key_format(self):
        """Key is the normalized name and size joined by the separator."""
        assert variant_key("The Roasted Cashews", " 180 G ") == f"roasted cashew{KEY_SEPARATOR}180g"

    def test_missing_size(self):
        """A missing size gives an empty size component."""
        assert variant_key("Milk", None) == variant_key("Milk", "") == f"milk{KEY_SEPARATOR}"


class TestIsDuplicateItem:
    """Tests for is_duplicate_item."""

    def test_same_name_same_size(self):
        """Identical name and size are duplicates."""
        assert is_duplicate_item("Milk", "2pt", "Milk", "2pt") is True

    def test_equivalent_size_formats(self):
        """Sizes written differently but equal in quantity match."""
        assert is_duplicate_item("Milk", "2 pints", "Milk", "2pt") is True
        assert is_duplicate_item("Juice", "1 litre", "Juice", "1000ml") is True

    def test_fuzzy_name_same_size(self):
        """Plural names still match."""
        assert is_duplicate_item("Milks", "2pt", "Milk", "2pt") is True

    def test_different_size(self):
        """Same name in a different size is a different variant."""
        assert is_duplicate_item("Milk", "2pt", "Milk", "4pt") is False
        assert is_duplicate_item("Bread", "400g", "Bread", "800g") is False

    def test_different_name(self):
        """Different names in the same size are not duplicates."""
        assert is_duplicate_item("Milk", "2pt", "Bread", "2pt") is False

    def test_missing_sizes(self):
        """Two missing sizes match; missing against present does not."""
        assert is_duplicate_item("Chicken Breast", None, "Chicken Breasts", None) is True
        assert is_duplicate_item("Eggs", "", "Eggs", "") is True
        assert is_duplicate_item("Milk", "2pt", "Milk", None) is False
        assert is_duplicate_item("Milk", None, "Milk", "4pt") is False
