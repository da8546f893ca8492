"""
Unit tests for catpoint.image.image_service.
"""

from __future__ import annotations

from catpoint.image.image_service import FakeImageService, StaticImageService


def test_fake_image_service_is_reproducible_with_seed() -> None:
    a = FakeImageService(seed=42)
    b = FakeImageService(seed=42)

    answers_a = [a.image_contains_cat(object(), 50.0) for _ in range(50)]
    answers_b = [b.image_contains_cat(object(), 50.0) for _ in range(50)]

    assert answers_a == answers_b
    assert all(isinstance(x, bool) for x in answers_a)
    # 50 fair coin flips are not all the same side
    assert True in answers_a and False in answers_a


def test_static_image_service_records_threshold() -> None:
    svc = StaticImageService(result=True)

    assert svc.image_contains_cat("img", 50.0) is True
    assert svc.image_contains_cat(None, 12.5) is True
    assert svc.calls == [50.0, 12.5]
