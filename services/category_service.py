from database.category_dao import CategoryDAO
from models.category import Category
from utils.constants import DEFAULT_CATEGORIES, TRANSACTION_TYPES


class CategoryService:
    def __init__(self, category_dao: CategoryDAO):
        self._dao = category_dao

    def get_all(self) -> list[Category]:
        return self._dao.get_all()

    def get_by_type(self, type_: str) -> list[Category]:
        return self._dao.get_by_type(type_)

    def seed_defaults(self) -> int:
        """Create any missing default categories. Returns how many were added."""
        existing = {c.name.lower() for c in self._dao.get_all()}
        added = 0
        for cat in DEFAULT_CATEGORIES:
            if cat["name"].lower() in existing:
                continue
            self._dao.create(
                name=cat["name"], type=cat["type"], color=cat["color"], is_default=True,
            )
            added += 1
        return added

    def create(self, name: str, type_: str, color: str = "#888888") -> Category:
        name = name.strip()
        if not name:
            raise ValueError("Category name cannot be empty.")
        self._validate_type(type_)
        existing = [c.name.lower() for c in self._dao.get_all()]
        if name.lower() in existing:
            raise ValueError(f"A category named '{name}' already exists.")
        return self._dao.create(name=name, type=type_, color=color, is_default=False)

    def update(self, category_id: int, name: str, type_: str, color: str) -> Category:
        name = name.strip()
        if not name:
            raise ValueError("Category name cannot be empty.")
        self._validate_type(type_)
        existing = [c for c in self._dao.get_all() if c.id != category_id]
        if any(c.name.lower() == name.lower() for c in existing):
            raise ValueError(f"A category named '{name}' already exists.")
        return self._dao.update(category_id, name=name, type=type_, color=color)

    def delete(self, category_id: int):
        cat = self._dao.get_by_id(category_id)
        if cat.is_default:
            raise ValueError("Default categories cannot be deleted.")
        self._dao.delete(category_id)

    @staticmethod
    def _validate_type(type_: str):
        if type_ not in TRANSACTION_TYPES:
            raise ValueError("Category type must be income or expense.")
