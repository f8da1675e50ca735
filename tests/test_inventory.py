import unittest

from stranded.game.inventory import Inventory
from stranded.game.models import Item


class InventoryTests(unittest.TestCase):
    def test_empty_inventory(self):
        inv = Inventory()
        self.assertEqual(inv.list_names(), ())
        self.assertFalse(inv)
        self.assertEqual(inv.describe(), "You have nothing.")

    def test_acquisition_order(self):
        inv = Inventory()
        inv.add_item(Item("Fuel Cell"))
        inv.add_item(Item("Engine Part"))
        self.assertEqual(inv.list_names(), ("Fuel Cell", "Engine Part"))
        self.assertEqual(len(inv), 2)
        self.assertEqual(inv.describe(), "You have: Fuel Cell, Engine Part")
        self.assertEqual([i.name for i in inv], ["Fuel Cell", "Engine Part"])

    def test_has_item_is_exact(self):
        inv = Inventory()
        inv.add_item(Item("Control Chip"))
        self.assertTrue(inv.has_item("Control Chip"))
        self.assertFalse(inv.has_item("control chip"))
        self.assertFalse(inv.has_item("Control"))


if __name__ == "__main__":
    unittest.main()
