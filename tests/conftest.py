import pytest

from tests.fakes import make_feature


@pytest.fixture
def kyiv_feature():
    return make_feature(
        "вулиця Хрещатик, Київ, Україна",
        [30.522, 50.4474],
        [
            {'id': 'postcode.123', 'text': '01001'},
            {'id': 'place.2951', 'text': 'Київ'},
            {'id': 'region.8927', 'text': 'Київ'},
            {'id': 'country.8775', 'text': 'Україна'},
        ],
    )


@pytest.fixture
def lviv_feature():
    return make_feature(
        "Львів, Львівська область, Україна",
        [24.0316, 49.8419],
        [
            {'id': 'region.9247', 'text': 'Львівська область'},
            {'id': 'country.8775', 'text': 'Україна'},
        ],
    )
