from pixelfilters.batch import apply_filter_batch
from pixelfilters.filters import InvertFilter
from pixelfilters.image import Image
from pixelfilters.stretch import ContrastStretch


def test_batch_by_name_keeps_order(random_image, scenario_image):
    images = [random_image, scenario_image]
    results = apply_filter_batch(images, "invert", n_jobs=2, prefer="threads")
    assert results == [InvertFilter().process(img) for img in images]


def test_batch_with_factory(random_image, scenario_image):
    images = [scenario_image, random_image, Image.new(0, 0)]
    results = apply_filter_batch(images, ContrastStretch, n_jobs=2, prefer="threads")
    assert results == [ContrastStretch().process(img) for img in images]


def test_empty_batch():
    assert apply_filter_batch([], "invert", n_jobs=1) == []


def test_batch_default_process_backend(random_image, scenario_image):
    images = [random_image, scenario_image]
    results = apply_filter_batch(images, "invert", n_jobs=2)
    assert results == [InvertFilter().process(img) for img in images]
