import unittest

from mindweather.regions import (
    LONG_FORM_NAMES,
    REGION_COORDINATES,
    RegionLocator,
    english_region_name,
    normalize_region_name,
    region_coordinates,
)


class TestRegionTables(unittest.TestCase):
    def test_seventeen_regions_with_fixed_anchors(self):
        self.assertEqual(len(REGION_COORDINATES), 17)
        self.assertEqual(REGION_COORDINATES["서울"], (126.978, 37.566))
        self.assertEqual(REGION_COORDINATES["제주"], (126.498, 33.489))
        self.assertEqual(REGION_COORDINATES["세종"], (127.289, 36.480))

    def test_every_long_form_points_at_a_canonical_key(self):
        for long_form, key in LONG_FORM_NAMES.items():
            with self.subTest(long_form=long_form):
                self.assertIn(key, REGION_COORDINATES)


class TestNormalizeRegionName(unittest.TestCase):
    def test_canonical_key_is_returned_as_is(self):
        self.assertEqual(normalize_region_name("경기"), "경기")

    def test_long_form_maps_to_short_key(self):
        self.assertEqual(normalize_region_name("서울특별시"), "서울")
        self.assertEqual(normalize_region_name("제주특별자치도"), "제주")
        self.assertEqual(normalize_region_name("경상남도"), "경남")

    def test_english_name_maps_to_short_key(self):
        self.assertEqual(normalize_region_name("Seoul"), "서울")
        self.assertEqual(normalize_region_name("Gyeonggi-do"), "경기")
        self.assertEqual(normalize_region_name("Jeju-do"), "제주")

    def test_unknown_name_is_returned_unchanged(self):
        self.assertEqual(normalize_region_name("Atlantis"), "Atlantis")
        self.assertIsNone(region_coordinates("Atlantis"))

    def test_lookup_is_exact_match_only(self):
        self.assertEqual(normalize_region_name("seoul"), "seoul")
        self.assertEqual(normalize_region_name(" 서울"), " 서울")

    def test_english_region_name(self):
        self.assertEqual(english_region_name("부산광역시"), "Busan")
        self.assertEqual(english_region_name("Atlantis"), "Atlantis")


class TestRegionLocator(unittest.TestCase):
    def test_locator_wraps_module_functions(self):
        locator = RegionLocator()
        self.assertEqual(locator.normalize("대전광역시"), "대전")
        self.assertEqual(locator.coordinates_of("대전"), (127.385, 36.351))
        self.assertIsNone(locator.coordinates_of("대전광역시"))
        self.assertTrue(locator.is_resolvable("Daejeon"))
        self.assertFalse(locator.is_resolvable("알 수 없음"))


if __name__ == "__main__":
    unittest.main()
