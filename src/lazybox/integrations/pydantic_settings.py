from lazybox._internal.integrations.pydantic_settings import (
    MODEL_BASES,
    is_pydantic_model_instance,
    model_to_mapping,
)

__all__ = [
    "MODEL_BASES",
    "is_pydantic_model_instance",
    "model_to_mapping",
]
