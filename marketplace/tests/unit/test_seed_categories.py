from io import StringIO

import pytest
from django.core.management import call_command

from marketplace.management.commands.seed_categories import DEFAULT_CATEGORIES
from marketplace.models import Category
from marketplace.tests.factories import CategoryFactory


@pytest.mark.unit
@pytest.mark.django_db
class TestSeedCategories:
    def test_creates_defaults(self):
        call_command("seed_categories", stdout=StringIO())
        assert set(Category.objects.values_list("name", flat=True)) == set(DEFAULT_CATEGORIES)

    def test_is_idempotent_and_keeps_existing(self):
        CategoryFactory(name="Books", description="Kept as is")

        out = StringIO()
        call_command("seed_categories", stdout=out)
        call_command("seed_categories", stdout=StringIO())

        assert Category.objects.count() == len(DEFAULT_CATEGORIES)
        assert Category.objects.get(name="Books").description == "Kept as is"
        assert "Category already exists: Books" in out.getvalue()
