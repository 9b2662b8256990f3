# artvista/api/routers/arts.py
from typing import List, Optional

from fastapi import APIRouter, Depends, File, Form, HTTPException, Query, UploadFile

from artvista.api.deps import get_art_service, get_current_user
from artvista.domain.errors import AppError
from artvista.domain.schemas import ArtListOut, ArtMessageOut, ArtOut, MessageOut
from artvista.services.art_service import ArtService, DEFAULT_PAGE_SIZE

router = APIRouter(prefix="/api/arts", tags=["arts"])


def _files(images: Optional[List[UploadFile]]):
    # pusty input type=file przychodzi jako plik bez nazwy
    return [(f.filename, f.file) for f in (images or []) if f.filename]


@router.get("", response_model=ArtListOut)
def list_arts(
    category: Optional[str] = Query(None),
    page: int = Query(1, ge=1),
    limit: int = Query(DEFAULT_PAGE_SIZE, ge=1),
    svc: ArtService = Depends(get_art_service),
):
    return svc.list_arts(category=category, page=page, limit=limit)


@router.get("/categories", response_model=List[str])
def list_categories(svc: ArtService = Depends(get_art_service)):
    return svc.categories()


@router.get("/my", response_model=List[ArtOut])
def my_arts(
    current_user: dict = Depends(get_current_user),
    svc: ArtService = Depends(get_art_service),
):
    return svc.get_my_arts(current_user["id"])


@router.get("/{art_id}", response_model=ArtOut)
def get_art(art_id: int, svc: ArtService = Depends(get_art_service)):
    try:
        return svc.get_art(art_id)
    except AppError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)


@router.post("", response_model=ArtMessageOut, status_code=201)
def create_art(
    title: Optional[str] = Form(None),
    description: Optional[str] = Form(None),
    price: Optional[str] = Form(None),
    categories: Optional[List[str]] = Form(None),
    images: Optional[List[UploadFile]] = File(None),
    current_user: dict = Depends(get_current_user),
    svc: ArtService = Depends(get_art_service),
):
    try:
        return svc.create_art(
            owner_id=current_user["id"],
            title=title,
            description=description,
            price=price,
            categories=categories,
            images=_files(images),
        )
    except AppError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)


@router.put("/{art_id}", response_model=ArtMessageOut)
def update_art(
    art_id: int,
    title: Optional[str] = Form(None),
    description: Optional[str] = Form(None),
    price: Optional[str] = Form(None),
    categories: Optional[List[str]] = Form(None),
    images: Optional[List[UploadFile]] = File(None),
    current_user: dict = Depends(get_current_user),
    svc: ArtService = Depends(get_art_service),
):
    try:
        return svc.update_art(
            art_id=art_id,
            owner_id=current_user["id"],
            title=title,
            description=description,
            price=price,
            categories=categories,
            images=_files(images),
        )
    except AppError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)


@router.delete("/{art_id}", response_model=MessageOut)
def delete_art(
    art_id: int,
    current_user: dict = Depends(get_current_user),
    svc: ArtService = Depends(get_art_service),
):
    try:
        return svc.delete_art(art_id, current_user["id"])
    except AppError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)
