"""Student record API endpoints."""

from typing import Annotated

from fastapi import APIRouter, Body
from pydantic import BaseModel, ConfigDict, Field

from rollbook.core.modules.student.models import Student
from rollbook.web.deps import AppDep, AuthTokenDep
from rollbook.web.openapi import ErrorResponse, MessageResponse

router: APIRouter = APIRouter(tags=["students"])


class CreateStudentRequest(BaseModel):
    """Request to create a new student.

    Fields are optional in the schema; missing ones are reported together as a
    single validation error.
    """

    roll_no: str | None = Field(None, alias="rollNo", description="Unique roll number")
    name: str | None = Field(None, description="Full name")
    class_name: str | None = Field(None, alias="class", description="Class or grade, e.g. 10-A")
    parent_contact: str | None = Field(None, alias="parentContact", description="10-digit parent phone number")
    status: str | None = Field(None, description="Active or Inactive, defaults to Active")

    model_config = ConfigDict(
        populate_by_name=True,
        coerce_numbers_to_str=True,
        json_schema_extra={
            "examples": [
                {"rollNo": "101", "name": "Asha", "class": "10-A", "parentContact": "9876543210"},
            ]
        },
    )


class UpdateStudentRequest(BaseModel):
    """Request to update a student (partial update). rollNo cannot be changed and is ignored."""

    name: str | None = Field(None, description="Full name")
    class_name: str | None = Field(None, alias="class", description="Class or grade")
    parent_contact: str | None = Field(None, alias="parentContact", description="10-digit parent phone number")
    status: str | None = Field(None, description="Active or Inactive")

    model_config = ConfigDict(populate_by_name=True, coerce_numbers_to_str=True)


@router.get(
    "/students",
    summary="List students",
    description="Get all students ordered by roll number.",
    operation_id="listStudents",
    responses={
        200: {"description": "List of all students"},
        401: {"model": ErrorResponse, "description": "Not authenticated"},
    },
)
async def list_students(app: AppDep, auth_token: AuthTokenDep) -> list[Student]:
    return await app.get_all_students(auth_token)


@router.get(
    "/students/{student_id}",
    summary="Get student",
    description="Get a single student by id.",
    operation_id="getStudent",
    responses={
        200: {"description": "Student details"},
        401: {"model": ErrorResponse, "description": "Not authenticated"},
        404: {"model": ErrorResponse, "description": "Student not found"},
    },
)
async def get_student(student_id: str, app: AppDep, auth_token: AuthTokenDep) -> Student:
    return await app.get_student(auth_token, student_id)


@router.post(
    "/students",
    summary="Create student",
    description="Create a new student. Roll numbers must be unique.",
    operation_id="createStudent",
    status_code=201,
    responses={
        201: {"description": "Student created successfully"},
        400: {"model": ErrorResponse, "description": "Missing or invalid fields, or duplicate roll number"},
        401: {"model": ErrorResponse, "description": "Not authenticated"},
    },
)
async def create_student(
    app: AppDep, auth_token: AuthTokenDep, request: Annotated[CreateStudentRequest | None, Body()] = None
) -> Student:
    request = request or CreateStudentRequest()
    return await app.create_student(
        auth_token,
        roll_no=request.roll_no,
        name=request.name,
        class_name=request.class_name,
        parent_contact=request.parent_contact,
        status=request.status,
    )


@router.put(
    "/students/{student_id}",
    summary="Update student",
    description="Update any of name, class, parentContact and status. Only provided fields are changed.",
    operation_id="updateStudent",
    responses={
        200: {"description": "Student updated successfully"},
        400: {"model": ErrorResponse, "description": "Invalid field value"},
        401: {"model": ErrorResponse, "description": "Not authenticated"},
        404: {"model": ErrorResponse, "description": "Student not found"},
    },
)
async def update_student(
    student_id: str,
    app: AppDep,
    auth_token: AuthTokenDep,
    request: Annotated[UpdateStudentRequest | None, Body()] = None,
) -> Student:
    request = request or UpdateStudentRequest()
    return await app.update_student(
        auth_token,
        student_id,
        name=request.name,
        class_name=request.class_name,
        parent_contact=request.parent_contact,
        status=request.status,
    )


@router.delete(
    "/students/{student_id}",
    summary="Delete student",
    description="Permanently delete a student.",
    operation_id="deleteStudent",
    responses={
        200: {"description": "Student deleted successfully"},
        401: {"model": ErrorResponse, "description": "Not authenticated"},
        404: {"model": ErrorResponse, "description": "Student not found"},
    },
)
async def delete_student(student_id: str, app: AppDep, auth_token: AuthTokenDep) -> MessageResponse:
    await app.delete_student(auth_token, student_id)
    return MessageResponse(message="Student deleted")
