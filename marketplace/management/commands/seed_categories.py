import logging

from django.core.management.base import BaseCommand
from django.db import transaction

from marketplace.models import Category


logger = logging.getLogger(__name__)

DEFAULT_CATEGORIES = {
    "Books": "Textbooks, novels and course readers",
    "Electronics": "Laptops, calculators, phones and accessories",
    "Furniture": "Desks, chairs, shelves and dorm furniture",
    "Clothing": "Uniforms, jackets and everyday wear",
    "School Supplies": "Stationery, lab gear and art materials",
    "Sports": "Equipment and gear for sports and fitness",
    "Others": "Anything that does not fit elsewhere",
}


class Command(BaseCommand):
    help = "Seeds the default campus categories; existing names are left untouched."

    def handle(self, *args, **options):
        self.stdout.write(self.style.SUCCESS("Seeding categories..."))

        created_count = 0
        with transaction.atomic():
            for name, description in DEFAULT_CATEGORIES.items():
                category, created = Category.objects.get_or_create(name=name, defaults={"description": description})
                if created:
                    self.stdout.write(self.style.SUCCESS(f"Created category: {category.name}"))
                    created_count += 1
                else:
                    self.stdout.write(self.style.WARNING(f"Category already exists: {category.name}"))

        logger.info(f"Seeded {created_count} categories")
        self.stdout.write(self.style.SUCCESS(f"Category seeding complete. Created {created_count} categories."))
