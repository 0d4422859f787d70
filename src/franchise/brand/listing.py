"""ListBrand: add a franchise brand to the directory."""

from protean.exceptions import ValidationError
from protean.fields import String, Text
from protean.utils.globals import current_domain
from protean.utils.mixins import handle

from franchise.brand.brand import Brand, slugify
from franchise.domain import franchise


@franchise.command(part_of="Brand")
class ListBrand:
    name = String(required=True, max_length=255)
    slug = String(max_length=255)
    category = String(max_length=100)
    description = Text()


@franchise.command_handler(part_of=Brand)
class ListBrandHandler:
    @handle(ListBrand)
    def list_brand(self, command):
        repo = current_domain.repository_for(Brand)

        slug = command.slug or slugify(command.name)
        if not slug:
            raise ValidationError({"slug": ["Brand slug cannot be empty"]})

        existing = repo._dao.query.filter(slug=slug).all()
        if existing.items:
            raise ValidationError({"slug": [f"A brand with slug '{slug}' already exists"]})

        brand = Brand.create(
            name=command.name,
            slug=slug,
            category=command.category,
            description=command.description,
        )
        repo.add(brand)
        return str(brand.id)
