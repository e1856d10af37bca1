from typing import Optional
from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from cinebook.core.pagination import Page, pagination
from cinebook.crud.food_item import crud_food_item
from cinebook.db.session import getDB_session
from cinebook.schemas.food_item import FoodItemCreate, FoodItemResponse, FoodItemUpdate

router = APIRouter(
    prefix="/food-item",
    tags=["food items"]
)


@router.get("/", response_model=list[FoodItemResponse])
async def list_food_items(
        search: Optional[str] = None,
        category: Optional[str] = None,
        available: Optional[bool] = None,
        page: Page = Depends(pagination),
        db: AsyncSession = Depends(getDB_session)):
    return await crud_food_item.list_food_items(db, page, search=search, category=category, available=available)


@router.get("/{food_item_id}", response_model=FoodItemResponse)
async def get_food_item(food_item_id: int, db: AsyncSession = Depends(getDB_session)):
    return await crud_food_item.get_food_item(db, food_item_id)


@router.post("/", response_model=FoodItemResponse, status_code=status.HTTP_201_CREATED)
async def create_food_item(food_item: FoodItemCreate, db: AsyncSession = Depends(getDB_session)):
    return await crud_food_item.create_food_item(db, food_item)


@router.put("/{food_item_id}", response_model=FoodItemResponse)
async def update_food_item(food_item_id: int, food_item: FoodItemUpdate, db: AsyncSession = Depends(getDB_session)):
    return await crud_food_item.update_food_item(db, food_item_id, food_item)


@router.delete("/{food_item_id}", response_model=FoodItemResponse)
async def delete_food_item(food_item_id: int, db: AsyncSession = Depends(getDB_session)):
    return await crud_food_item.delete_food_item(db, food_item_id)
