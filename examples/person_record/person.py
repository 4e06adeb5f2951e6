# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""Person record example: paths, links, flat iteration and dump."""

from genro_properties import Properties


def build_person() -> Properties:
    props = Properties(source={
        'Name': 'Hugentobler',
        'First Name': 'Klaus-Peter',
        'Age': 50,
        'Address': {
            'Street': 'Hochtiefstrasse',
            'House Number': 123,
            'Location': 'Muhen',
            'Postal Code': 5037,
            'Country': 'Switzerland',
            'Phone': {'Home': '123 45 67 89', 'Mobile': '079 45 67 89'},
        },
    })
    props.add_link('Address.Primary Phone Number', 'Address.Phone.Home')
    props.add_link('Contacts', 'Address.Phone')
    # lands in Address.Phone
    props.add_property('Contacts.Office', '399 33 44 55')
    return props


if __name__ == '__main__':
    person = build_person()
    print(person)
    for path, value in person:
        print(f"{path}: {value}")
