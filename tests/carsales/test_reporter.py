import unittest

from listing_crawler.carsales.core.listing import Listing
from listing_crawler.carsales.core.reporter import format_csv, format_display, render

OUTBACK = Listing(
    title='Subaru Outback',
    url='http://x/1',
    year=2015,
    price=12000,
    odometer=150000,
    state='VIC',
)

class TestReporter(unittest.TestCase):
    def test_csv(self):
        self.assertEqual(
            format_csv([OUTBACK]),
            'Odometer,Price,Year,State,Title,URL\n'
            '150000,12000,2015,VIC,"Subaru Outback","http://x/1"'
        )

    def test_csv_header_only(self):
        self.assertEqual(format_csv([]), 'Odometer,Price,Year,State,Title,URL')

    def test_csv_missing_fields_and_quotes(self):
        listing = Listing(title='2009 Outback "Premium"')
        self.assertEqual(
            format_csv([listing]).splitlines()[1],
            ',,,,"2009 Outback ""Premium""",""'
        )

    def test_display(self):
        self.assertEqual(
            format_display([OUTBACK]),
            'Title: Subaru Outback\n'
            'URL http://x/1\n'
            'Year: 2015 Price: 12,000 Odometer: 150,000 State: VIC\n'
            '\n'
        )

    def test_render(self):
        self.assertEqual(render([OUTBACK], 'csv'), format_csv([OUTBACK]))
        self.assertEqual(render([OUTBACK], 'text'), format_display([OUTBACK]))
        with self.assertRaises(ValueError):
            render([OUTBACK], 'xml')

if __name__ == '__main__':
    unittest.main()
