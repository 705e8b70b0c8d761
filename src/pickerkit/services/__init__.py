"""Service layer — engine operations exposed as ServiceResult-returning calls."""
