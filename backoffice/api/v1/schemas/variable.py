"""配置变量的响应模型。"""

from backoffice.api.v1.schemas.common import ResponseEnvelope

VariableResponse = ResponseEnvelope[str]
