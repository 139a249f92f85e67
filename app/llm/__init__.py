from app.llm.client_base import Attachment, BaseLLMClient
from app.llm.factory import ModelInvokerFactory
from app.llm.invoker import ModelInvoker

__all__ = ["Attachment", "BaseLLMClient", "ModelInvoker", "ModelInvokerFactory"]
