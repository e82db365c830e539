import random
from faker import Faker
from faker.providers import BaseProvider


class FreightProvider(BaseProvider):
    """
    Demo data for the seed command: Indian road freight flavoured vehicle
    numbers, consignments and storage slots.
    """

    state_codes = ['MH', 'DL', 'KA', 'TN', 'GJ', 'RJ', 'UP', 'WB', 'TS', 'HR']

    goods = [
        'Cotton Fabric', 'Silk Saree Bundle', 'Electronics Components', 'Machine Spares',
        'Pharma Cartons', 'Auto Parts', 'Ceramic Tiles', 'Packaged Tea', 'Steel Fittings',
    ]

    location_types = ['bin', 'rack', 'shelf', 'floor']

    def vehicle_number(self):
        """e.g. MH12AB1234"""
        return (f"{self.random_element(self.state_codes)}{random.randint(1, 50):02d}"
                f"{self.random_uppercase_letter()}{self.random_uppercase_letter()}"
                f"{random.randint(1000, 9999)}")

    def consignment(self):
        return f"{random.randint(1, 40)} x {self.random_element(self.goods)}"

    def item_code(self):
        return f"ART-{random.randint(1, 999):03d}"

    def location_type(self):
        return self.random_element(self.location_types)

    def slot_name(self, row, col):
        return f"{chr(ord('A') + row)}{col + 1}"


fake = Faker('en_IN')
fake.add_provider(FreightProvider)
