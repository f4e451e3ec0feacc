"""
Unit tests for search criteria construction.
"""

import unittest

from search.criteria import SearchCriteria, UnknownCriterionError, InvalidCriterionError


class TestSearchCriteria(unittest.TestCase):
    """Test building criteria from mappings and forms"""

    def test_from_mapping_recognized_keys(self):
        criteria = SearchCriteria.from_mapping({
            'Committee': ['Judiciary'],
            'SenatorAuthor': ['Carpenter'],
            'Keywords': ['Drugs, Physician']
        })

        self.assertEqual(criteria.committee, ['Judiciary'])
        self.assertEqual(criteria.senator_author, ['Carpenter'])
        self.assertEqual(criteria.keywords, ['Drugs, Physician'])
        self.assertIsNone(criteria.title)
        self.assertEqual(criteria.present_keys(), ['Committee', 'SenatorAuthor', 'Keywords'])

    def test_from_mapping_accepts_plain_string(self):
        criteria = SearchCriteria.from_mapping({'Title': '2023 Senate Bill 1'})
        self.assertEqual(criteria.title, ['2023 Senate Bill 1'])

    def test_unknown_keys_ignored_by_default(self):
        criteria = SearchCriteria.from_mapping({'Sponsor': ['x'], 'Committee': ['Finance']})
        self.assertEqual(criteria.present_keys(), ['Committee'])

    def test_unknown_keys_rejected_when_strict(self):
        with self.assertRaises(UnknownCriterionError) as cm:
            SearchCriteria.from_mapping({'Sponsor': ['x']}, strict=True)
        self.assertIn('Sponsor', str(cm.exception))

    def test_non_text_values_rejected(self):
        for value in (5, ['Judiciary', 5], {'name': 'Judiciary'}):
            with self.subTest(value=value):
                with self.assertRaises(InvalidCriterionError) as cm:
                    SearchCriteria.from_mapping({'Committee': value})
                self.assertIn('Committee', str(cm.exception))

    def test_empty_mapping(self):
        criteria = SearchCriteria.from_mapping({})
        self.assertTrue(criteria.is_empty())
        self.assertEqual(criteria.to_mapping(), {})

    def test_from_form_keeps_every_field(self):
        criteria = SearchCriteria.from_form(committee='Judiciary', keywords='   ')

        self.assertEqual(len(criteria.present_keys()), 9)
        self.assertEqual(criteria.committee, ['Judiciary'])
        self.assertEqual(criteria.keywords, [''])
        self.assertEqual(criteria.senator_author, [''])

    def test_to_mapping_round_trip(self):
        mapping = {'Title': ['Senate'], 'Representatives': ['Sinicki, Andraca']}
        self.assertEqual(SearchCriteria.from_mapping(mapping).to_mapping(), mapping)

    def test_describe_skips_blank_terms(self):
        criteria = SearchCriteria.from_form(committee='Judiciary')
        self.assertEqual(criteria.describe(), 'Committee=Judiciary')
        self.assertEqual(SearchCriteria.from_form().describe(), '(no criteria)')


if __name__ == '__main__':
    unittest.main()
