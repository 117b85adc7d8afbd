"""公共代码相关的请求与响应模型。"""

from typing import List

from pydantic import BaseModel, Field

from backoffice.api.v1.schemas.common import ResponseEnvelope


class CodeGroupCreateRequest(BaseModel):
    code_group: str = Field(..., min_length=1, max_length=100, pattern=r"^[A-Za-z0-9_\-]+$")
    name: str = Field(..., min_length=1, max_length=100)


class CodeGroupUpdateRequest(BaseModel):
    name: str = Field(..., min_length=1, max_length=100)


class CodeGroupData(BaseModel):
    code_group: str
    name: str


class CodeCreateRequest(BaseModel):
    code: str = Field(..., min_length=1, max_length=100)
    name: str = Field(..., min_length=1, max_length=100)
    is_using: bool = True
    display_order: int = Field(default=0, ge=0)


class CodeData(BaseModel):
    code_group: str
    code: str
    name: str
    is_using: bool
    display_order: int


class SelectItem(BaseModel):
    """前端下拉组件使用的选项结构。"""

    value: str
    text: str


CodeGroupListResponse = ResponseEnvelope[List[CodeGroupData]]
CodeGroupResponse = ResponseEnvelope[CodeGroupData]
CodeResponse = ResponseEnvelope[CodeData]
SelectItemListResponse = ResponseEnvelope[List[SelectItem]]
DeletionResponse = ResponseEnvelope[None]
