from pydantic import ValidationError

from src.services.errors import ValidationFailed


def _error_fields(e: ValidationError):
    return sorted({".".join(str(p) for p in err["loc"]) for err in e.errors()})


def _validate(schema, payload):
    try:
        return schema.model_validate(payload)
    except ValidationError as e:
        fields = _error_fields(e)
        raise ValidationFailed(f"Invalid value for: {', '.join(fields)}", fields=fields)


def validate_new(schema, payload: dict):
    """Validate a full payload and return it JSON-ready."""
    return _validate(schema, payload).model_dump(mode="json")


def validate_patch(schema, update_schema, entity, patch: dict):
    """
    Check ``patch`` against ``update_schema``, merge it over the stored
    ``entity``, validate the merged result with ``schema`` and return only the
    patched fields, JSON-ready.
    """
    changes = _validate(update_schema, patch).model_dump(exclude_unset=True)
    merged = {name: getattr(entity, name) for name in schema.model_fields}
    merged.update(changes)
    validated = validate_new(schema, merged)
    return {name: validated[name] for name in changes}
