import numpy
import pytest

from qdfloat import Double, Quad


@pytest.fixture
def rng():
    return numpy.random.default_rng(42)


@pytest.fixture(params=[Double, Quad], ids=['Double', 'Quad'])
def cls(request):
    return request.param
