# salesperf/api/v1/sales.py
from __future__ import annotations

from datetime import datetime
from typing import Any, List, Optional
from uuid import UUID

from fastapi import APIRouter, Body, Depends, HTTPException, Query, status
from pydantic import ValidationError

from salesperf.api.deps.stores import get_bulk_processor, get_sale_store, get_user_directory
from salesperf.core.bulk_ingestion import BulkIngestionProcessor
from salesperf.core.regions import ProductCategory
from salesperf.crud.sales import SqlSaleStore
from salesperf.crud.users import SqlUserDirectory
from salesperf.models.sale import DEFAULT_COMMISSION_RATE, Sale
from salesperf.schemas.sales import (
    BulkItemErrorOut,
    BulkSalesOut,
    BulkValidationErrorOut,
    SaleCreate,
    SaleOut,
)

router = APIRouter(prefix="/sales", tags=["sales"])


@router.post("", response_model=SaleOut, status_code=status.HTTP_201_CREATED)
async def create_sale(
    payload: SaleCreate,
    users: SqlUserDirectory = Depends(get_user_directory),
    sales: SqlSaleStore = Depends(get_sale_store),
):
    user = await users.find_by_id(payload.user_id)
    if user is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found")

    commission_rate = payload.commission_rate
    if commission_rate is None:
        commission_rate = DEFAULT_COMMISSION_RATE

    sale = Sale(
        user_id=payload.user_id,
        amount=payload.amount,
        date=payload.date,
        category=payload.category.value,
        commission_rate=commission_rate,
    )
    return await sales.insert(sale)


@router.post("/bulk", response_model=BulkSalesOut)
async def bulk_import_sales(
    payload: List[Any] = Body(...),
    processor: BulkIngestionProcessor = Depends(get_bulk_processor),
):
    """
    Batch import.
      - items failing field validation are listed in validation_errors
      - the rest go through the processor; unknown users and duplicates are
        listed in errors
    All indexes refer to positions in the submitted list.
    """
    valid: list[SaleCreate] = []
    positions: list[int] = []
    validation_errors: list[BulkValidationErrorOut] = []

    for index, raw in enumerate(payload):
        try:
            valid.append(SaleCreate.model_validate(raw))
            positions.append(index)
        except ValidationError as e:
            details = [
                {"field": ".".join(str(p) for p in err["loc"]), "message": err["msg"]}
                for err in e.errors()
            ]
            validation_errors.append(BulkValidationErrorOut(index=index, errors=details))

    if not valid:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail={
                "error": "No valid sales data provided",
                "validation_errors": [v.model_dump() for v in validation_errors],
            },
        )

    result = await processor.process(valid)

    return BulkSalesOut(
        success=result.success_count,
        errors=[BulkItemErrorOut(index=positions[e.index], error=e.error) for e in result.errors],
        validation_errors=validation_errors,
    )


@router.get("", response_model=List[SaleOut])
async def list_sales(
    user_id: Optional[UUID] = None,
    start_date: Optional[datetime] = None,
    end_date: Optional[datetime] = None,
    category: Optional[ProductCategory] = Query(None, alias="product_category"),
    sales: SqlSaleStore = Depends(get_sale_store),
):
    rows = await sales.search(
        user_id=user_id,
        start=start_date,
        end=end_date,
        category=category.value if category else None,
    )
    return list(rows)


@router.get("/{sale_id}", response_model=SaleOut)
async def get_sale(
    sale_id: UUID,
    sales: SqlSaleStore = Depends(get_sale_store),
):
    sale = await sales.get(sale_id)
    if not sale:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Sale not found")
    return sale
