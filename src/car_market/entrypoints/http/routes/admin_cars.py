from fastapi import APIRouter, Depends, File, Form, Response, UploadFile, status

from car_market.entrypoints.http.dependencies import (
    get_add_car_image_use_case,
    get_add_car_specification_use_case,
    get_create_car_use_case,
    get_delete_car_image_use_case,
    get_delete_car_specification_use_case,
    get_delete_car_use_case,
    get_update_car_use_case,
)
from car_market.entrypoints.http.dtos.car import (
    CarImageDTO,
    CarResponseDTO,
    CarSpecificationDTO,
)
from car_market.entrypoints.http.dtos.car_admin import (
    CarCreateDTO,
    CarSpecificationInputDTO,
    CarUpdateDTO,
)
from car_market.entrypoints.http.error_responses import (
    NOT_FOUND_RESPONSE,
    SERVER_ERROR_RESPONSE,
    VALIDATION_ERROR_RESPONSE,
)
from car_market.entrypoints.http.mappers.car_mapper import CarMapper
from car_market.use_cases.manage_car_media import (
    AddCarImage,
    AddCarImageRequest,
    AddCarSpecification,
    AddCarSpecificationRequest,
    DeleteCarImage,
    DeleteCarImageRequest,
    DeleteCarSpecification,
    DeleteCarSpecificationRequest,
)
from car_market.use_cases.manage_cars import (
    CreateCar,
    CreateCarRequest,
    DeleteCar,
    DeleteCarRequest,
    UpdateCar,
)


router = APIRouter(prefix="/admin", tags=["Admin"])

_WRITE_RESPONSES = {422: VALIDATION_ERROR_RESPONSE, 500: SERVER_ERROR_RESPONSE}
_ITEM_RESPONSES = {404: NOT_FOUND_RESPONSE, **_WRITE_RESPONSES}


@router.post(
    "/cars",
    response_model=CarResponseDTO,
    status_code=status.HTTP_201_CREATED,
    summary="Create a car listing",
    responses=_WRITE_RESPONSES,
)
def create_car(
    payload: CarCreateDTO,
    use_case: CreateCar = Depends(get_create_car_use_case),
) -> CarResponseDTO:
    car = use_case.execute(CreateCarRequest(car=CarMapper.to_domain(payload)))
    return CarMapper.to_response(car)


@router.put(
    "/cars/{car_id}",
    response_model=CarResponseDTO,
    summary="Update a car listing",
    description="""
    Partial update: only fields present in the body change. When
    `specifications` is present it replaces the listing's whole set.
    """,
    responses=_ITEM_RESPONSES,
)
def update_car(
    car_id: int,
    payload: CarUpdateDTO,
    use_case: UpdateCar = Depends(get_update_car_use_case),
) -> CarResponseDTO:
    car = use_case.execute(CarMapper.to_update_request(car_id, payload))
    return CarMapper.to_response(car)


@router.delete(
    "/cars/{car_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete a car listing",
    description="Deletes the listing, its specifications, its images and their files.",
    responses=_ITEM_RESPONSES,
)
def delete_car(
    car_id: int,
    use_case: DeleteCar = Depends(get_delete_car_use_case),
) -> Response:
    use_case.execute(DeleteCarRequest(car_id=car_id))
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post(
    "/cars/{car_id}/images",
    response_model=CarImageDTO,
    status_code=status.HTTP_201_CREATED,
    summary="Upload a car image",
    description="Multipart upload (`file`). JPEG, PNG or WebP; size capped by MAX_FILE_SIZE.",
    responses=_ITEM_RESPONSES,
)
def add_car_image(
    car_id: int,
    file: UploadFile = File(...),
    is_main: bool = Form(default=False),
    is_360_view: bool = Form(default=False),
    use_case: AddCarImage = Depends(get_add_car_image_use_case),
) -> CarImageDTO:
    image = use_case.execute(
        AddCarImageRequest(
            car_id=car_id,
            filename=file.filename or "",
            content=file.file.read(),
            content_type=file.content_type,
            is_main=is_main,
            is_360_view=is_360_view,
        )
    )
    return CarMapper.to_image_response(image)


@router.delete(
    "/cars/images/{image_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete a car image",
    responses=_ITEM_RESPONSES,
)
def delete_car_image(
    image_id: int,
    use_case: DeleteCarImage = Depends(get_delete_car_image_use_case),
) -> Response:
    use_case.execute(DeleteCarImageRequest(image_id=image_id))
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post(
    "/cars/{car_id}/specifications",
    response_model=CarSpecificationDTO,
    status_code=status.HTTP_201_CREATED,
    summary="Add a car specification",
    responses=_ITEM_RESPONSES,
)
def add_car_specification(
    car_id: int,
    payload: CarSpecificationInputDTO,
    use_case: AddCarSpecification = Depends(get_add_car_specification_use_case),
) -> CarSpecificationDTO:
    spec = use_case.execute(
        AddCarSpecificationRequest(car_id=car_id, key=payload.key, value=payload.value)
    )
    return CarMapper.to_specification_response(spec)


@router.delete(
    "/cars/specifications/{spec_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete a car specification",
    responses=_ITEM_RESPONSES,
)
def delete_car_specification(
    spec_id: int,
    use_case: DeleteCarSpecification = Depends(get_delete_car_specification_use_case),
) -> Response:
    use_case.execute(DeleteCarSpecificationRequest(spec_id=spec_id))
    return Response(status_code=status.HTTP_204_NO_CONTENT)
