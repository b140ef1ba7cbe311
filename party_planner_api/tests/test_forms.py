import unittest

from starlette.datastructures import FormData

from party_planner_api.app.core.forms import form_to_dict


class FormToDictTests(unittest.TestCase):
    def test_single_and_repeated_keys(self):
        form = FormData([("name", "Ana"), ("services", "Pasteles"), ("services", "Barra")])
        self.assertEqual(form_to_dict(form), {"name": "Ana", "services": ["Pasteles", "Barra"]})

    def test_nested_item_keys_become_rows_ordered_by_index(self):
        form = FormData([
            ("clientName", "Mario"),
            ("items[1][name]", "Sillas"),
            ("items[1][quantity]", "50"),
            ("items[0][name]", "Mesa"),
            ("items[0][quantity]", "1"),
            ("items[0][id]", "client-item-0"),
        ])
        data = form_to_dict(form)
        self.assertEqual(data["clientName"], "Mario")
        self.assertEqual(data["items"], [
            {"name": "Mesa", "quantity": "1", "id": "client-item-0"},
            {"name": "Sillas", "quantity": "50"},
        ])

    def test_empty_form(self):
        self.assertEqual(form_to_dict(FormData([])), {})


if __name__ == "__main__":
    unittest.main()
