from fastapi import HTTPException, Request
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError
from fastapi.encoders import jsonable_encoder
from starlette import status


class MarketError(Exception):
	"""Base class for errors raised by the marketplace services."""

	status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
	message = "Internal error"

	def __init__(self, message: str | None = None, details=None):
		super().__init__(message or self.message)
		self.message = message or self.message
		self.details = details


class NotFoundError(MarketError):
	status_code = status.HTTP_404_NOT_FOUND
	message = "Not found"


class AuthenticationRequired(MarketError):
	status_code = status.HTTP_401_UNAUTHORIZED
	message = "Authentication required"


class PermissionDenied(MarketError):
	status_code = status.HTTP_403_FORBIDDEN
	message = "Forbidden"


class StoreUnavailable(MarketError):
	"""The database rejected or failed a request."""

	status_code = status.HTTP_503_SERVICE_UNAVAILABLE
	message = "Storage unavailable"


def error_response(request: Request, status_code: int, message: str, details=None, headers=None):
	# Ensure details is serializable
	if isinstance(details, Exception):
		details = str(details)
	return JSONResponse(
		status_code=status_code,
		content={
			"error": {
				"message": message,
				"details": jsonable_encoder(details),
				"request_id": getattr(request.state, "request_id", None),
			}
		},
		headers=headers,
	)

async def validation_exception_handler(request: Request, exc: RequestValidationError):
	return error_response(
		request,
		status.HTTP_422_UNPROCESSABLE_ENTITY,
		"Validation error",
		details=exc.errors(),
	)

async def http_exception_handler(request: Request, exc: HTTPException):
	return error_response(
		request,
		exc.status_code,
		str(exc.detail),
		headers=getattr(exc, "headers", None),
	)

async def market_exception_handler(request: Request, exc: MarketError):
	return error_response(request, exc.status_code, exc.message, details=exc.details)
