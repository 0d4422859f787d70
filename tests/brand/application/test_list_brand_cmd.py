"""Application tests for ListBrand."""

import pytest
from protean import current_domain
from protean.exceptions import ValidationError

from franchise.brand.brand import Brand
from franchise.brand.listing import ListBrand


class TestListBrand:
    def test_list_persists(self):
        brand_id = current_domain.process(
            ListBrand(name="Tutor Tree", category="Education"),
            asynchronous=False,
        )
        brand = current_domain.repository_for(Brand).get(brand_id)
        assert brand.name == "Tutor Tree"
        assert brand.slug == "tutor-tree"
        assert brand.category == "Education"

    def test_duplicate_slug_rejected(self):
        current_domain.process(ListBrand(name="Tutor Tree"), asynchronous=False)
        with pytest.raises(ValidationError) as exc:
            current_domain.process(ListBrand(name="Tutor  Tree!"), asynchronous=False)
        assert "already exists" in str(exc.value)

    def test_name_without_slug_characters_rejected(self):
        with pytest.raises(ValidationError):
            current_domain.process(ListBrand(name="!!!"), asynchronous=False)
