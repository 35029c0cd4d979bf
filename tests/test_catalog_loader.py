"""
Tests for the merchant catalog and its CSV loader.
"""

import os
import tempfile
import unittest

from receipt_engine.config.catalog_loader import (
    MerchantCatalog,
    load_merchant_catalog,
    load_merchant_catalog_csv,
)
from receipt_engine.errors import CatalogLoadError

CSV_HEADER = (
    "key,name,chain,category,typical_vat_rate,seasonal_products,"
    "organization_id_pattern,base_confidence,is_regulated_alcohol\n"
)


class TestBuiltInCatalog(unittest.TestCase):
    """Test the built-in merchant catalog."""

    def setUp(self):
        """Set up test fixtures."""
        self.catalog = load_merchant_catalog()

    def test_known_merchants_present(self):
        for key in ("REMA", "KIWI", "COOP", "VINMONOPOLET", "ELKJOP"):
            self.assertIn(key, self.catalog)
        self.assertEqual(self.catalog["rema"].name, "REMA 1000")
        self.assertTrue(self.catalog["VINMONOPOLET"].is_regulated_alcohol)
        self.assertIsNone(self.catalog.get("IKEA"))

    def test_rates_are_valid_brackets(self):
        for _, profile in self.catalog.items():
            self.assertIn(profile.typical_vat_rate, (0, 12, 15, 25))
            self.assertGreaterEqual(profile.base_confidence, 0.0)
            self.assertLessEqual(profile.base_confidence, 1.0)

    def test_keys_by_priority(self):
        keys = self.catalog.keys_by_priority()
        self.assertEqual(keys[0], "VINMONOPOLET")
        self.assertEqual(keys, sorted(keys, key=lambda k: (-len(k), k)))
        self.assertEqual(list(self.catalog), keys)
        self.assertEqual(len(keys), len(self.catalog))

    def test_catalog_is_read_only(self):
        with self.assertRaises(TypeError):
            self.catalog._profiles["IKEA"] = self.catalog["REMA"]

    def test_resolve_exact_names(self):
        self.assertEqual(self.catalog.resolve_name("rema 1000"), "REMA 1000")
        self.assertEqual(self.catalog.resolve_name("kiwi"), "KIWI")
        self.assertEqual(self.catalog.resolve_name("Elkjøp"), "Elkjøp")

    def test_resolve_close_spelling(self):
        self.assertEqual(self.catalog.resolve_name("Rema1000"), "REMA 1000")

    def test_resolve_unrelated_name_kept(self):
        self.assertEqual(self.catalog.resolve_name("Lokal  bakeri"), "LOKAL BAKERI")
        self.assertEqual(self.catalog.resolve_name(""), "")

    def test_empty_catalog_rejected(self):
        with self.assertRaises(CatalogLoadError):
            MerchantCatalog({})


class TestCsvCatalog(unittest.TestCase):
    """Test loading a catalog override from CSV."""

    def _write(self, rows):
        handle = tempfile.NamedTemporaryFile("w", suffix=".csv", delete=False, encoding="utf-8")
        with handle:
            handle.write(CSV_HEADER + rows)
        self.addCleanup(os.remove, handle.name)
        return handle.name

    def test_load_csv(self):
        path = self._write(
            "rema,REMA 1000,Reitangruppen,grocery,15,grillmat;is,,0.95,false\n"
            "POLET,Vinmonopolet,Vinmonopolet,alcohol,25,,NO 914 781 396 MVA,0.98,true\n"
        )
        catalog = load_merchant_catalog(path)
        self.assertEqual(len(catalog), 2)
        self.assertEqual(catalog["REMA"].seasonal_products, ("grillmat", "is"))
        self.assertIsNone(catalog["REMA"].organization_id_pattern)
        self.assertTrue(catalog["POLET"].is_regulated_alcohol)
        self.assertEqual(catalog["POLET"].organization_id_pattern, "NO 914 781 396 MVA")

    def test_rows_without_key_skipped(self):
        path = self._write(
            ",Nameless,,grocery,15,,,0.5,false\n"
            "KIWI,KIWI,NorgesGruppen,grocery,15,,,0.95,false\n"
        )
        self.assertEqual(list(load_merchant_catalog_csv(path)), ["KIWI"])

    def test_missing_file(self):
        with self.assertRaises(FileNotFoundError):
            load_merchant_catalog("/nonexistent/merchants.csv")

    def test_invalid_vat_rate_rejected(self):
        path = self._write("KIWI,KIWI,NorgesGruppen,grocery,20,,,0.95,false\n")
        with self.assertRaises(CatalogLoadError):
            load_merchant_catalog(path)

    def test_non_numeric_confidence_rejected(self):
        path = self._write("KIWI,KIWI,NorgesGruppen,grocery,15,,,high,false\n")
        with self.assertRaises(CatalogLoadError):
            load_merchant_catalog(path)

    def test_empty_file_rejected(self):
        path = self._write("")
        with self.assertRaises(CatalogLoadError):
            load_merchant_catalog(path)


if __name__ == '__main__':
    unittest.main()
