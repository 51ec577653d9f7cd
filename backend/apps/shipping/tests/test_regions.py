import unittest

from apps.shipping.regions import DEPARTMENTS, RegionTable, default_region_table


class RegionTableTests(unittest.TestCase):
    def test_table_order_and_contents(self):
        keys = [d.key for d in default_region_table.all()]
        self.assertEqual(keys, ["antioquia", "bogota", "valle", "atlantico", "santander"])
        bogota = default_region_table.get("bogota")
        self.assertEqual(bogota.name, "Bogotá D.C.")
        self.assertEqual(bogota.shipping_cost, 12000)
        self.assertEqual((bogota.delivery_days.min, bogota.delivery_days.max), (6, 9))

    def test_unknown_or_blank_key(self):
        self.assertIsNone(default_region_table.get("amazonas"))
        self.assertIsNone(default_region_table.get(None))
        self.assertEqual(default_region_table.cities_for("amazonas"), ())

    def test_cities_for(self):
        self.assertIn("Envigado", default_region_table.cities_for("antioquia"))

    def test_find_by_region_matches_both_directions(self):
        self.assertEqual(default_region_table.find_by_region("Departamento de Antioquia").key, "antioquia")
        self.assertEqual(default_region_table.find_by_region("bogotá").key, "bogota")
        self.assertEqual(default_region_table.find_by_region("VALLE DEL CAUCA").key, "valle")

    def test_find_by_region_blank_or_unmatched(self):
        self.assertIsNone(default_region_table.find_by_region(""))
        self.assertIsNone(default_region_table.find_by_region(None))
        self.assertIsNone(default_region_table.find_by_region("Nariño"))

    def test_first_match_wins(self):
        table = RegionTable(DEPARTMENTS[::-1])
        # "a" is contained in every name; the table order decides
        self.assertEqual(table.find_by_region("a").key, "santander")
