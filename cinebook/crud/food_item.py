from typing import Optional
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.sql import exists, select

from cinebook.core.pagination import Page
from cinebook.exceptions import FoodItemNotFoundError, InvalidInputError, ResourceInUseError
from cinebook.models.booking_food import BookingFood
from cinebook.models.food_item import FoodItem
from cinebook.schemas.food_item import FoodItemCreate, FoodItemUpdate

NULLABLE_FIELDS = {"description", "image_url"}


class CRUDFoodItem:
    async def get_food_item(self, db: AsyncSession, food_item_id: int) -> FoodItem:
        food_item = await db.get(FoodItem, food_item_id)
        if food_item is None:
            raise FoodItemNotFoundError()
        return food_item

    async def get_food_items_by_ids(self, db: AsyncSession, food_item_ids) -> dict:
        if not food_item_ids:
            return {}
        result = await db.scalars(select(FoodItem).where(FoodItem.id.in_(list(food_item_ids))))
        return {food_item.id: food_item for food_item in result.all()}

    async def list_food_items(self, db: AsyncSession, page: Page, search: Optional[str] = None,
                              category: Optional[str] = None, available: Optional[bool] = None):
        stmt = select(FoodItem)
        if search:
            stmt = stmt.where(FoodItem.name.ilike(f"%{search}%"))
        if category:
            stmt = stmt.where(FoodItem.category == category)
        if available is not None:
            stmt = stmt.where(FoodItem.available.is_(available))
        result = await db.execute(
            stmt.order_by(FoodItem.created_at.desc(), FoodItem.id.desc())
            .limit(page.limit)
            .offset(page.offset))
        return result.scalars().all()

    async def create_food_item(self, db: AsyncSession, data: FoodItemCreate) -> FoodItem:
        food_item = FoodItem(**data.model_dump())
        db.add(food_item)
        await db.commit()
        await db.refresh(food_item)
        return food_item

    async def update_food_item(self, db: AsyncSession, food_item_id: int, data: FoodItemUpdate) -> FoodItem:
        changes = {
            field: value for field, value in data.model_dump(exclude_unset=True).items()
            if value is not None or field in NULLABLE_FIELDS
        }
        if not changes:
            raise InvalidInputError("No valid fields to update", code="NO_FIELDS_TO_UPDATE")
        food_item = await self.get_food_item(db, food_item_id)
        for field, value in changes.items():
            setattr(food_item, field, value)
        await db.commit()
        await db.refresh(food_item)
        return food_item

    async def delete_food_item(self, db: AsyncSession, food_item_id: int) -> FoodItem:
        food_item = await self.get_food_item(db, food_item_id)
        ordered = await db.scalar(select(exists().where(BookingFood.food_item_id == food_item_id)))
        if ordered:
            raise ResourceInUseError("Food item is part of existing bookings", code="FOOD_ITEM_IN_USE")
        await db.delete(food_item)
        await db.commit()
        return food_item


crud_food_item = CRUDFoodItem()
