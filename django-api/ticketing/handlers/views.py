"""HTTP handlers (views) - handle HTTP concerns only.

Handlers:
- Parse requests and validate input format
- Call services for business logic
- Map domain outcomes to HTTP responses
- Never contain business logic
- Never expose internal error details
"""

import logging

from django.http import HttpResponse
from rest_framework import status
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.views import APIView

from ticketing.conf import get_setting
from ticketing.domain import Credential, Invalid, Rejected
from ticketing.domain import credentials
from ticketing.domain.errors import USER_MESSAGES, ErrorCode
from ticketing.handlers import dependencies
from ticketing.handlers.authentication import viewer_identity
from ticketing.handlers.serializers import (
    CredentialSerializer,
    IssuedTicketSerializer,
    OrderSerializer,
    TicketInfoSerializer,
    TicketPageSerializer,
)
from ticketing.services.access import present

logger = logging.getLogger(__name__)

INTERNAL_ERROR = "Internal Server Error"

REJECTION_STATUS = {
    ErrorCode.INVALID_INPUT: status.HTTP_400_BAD_REQUEST,
    ErrorCode.UNAUTHORIZED: status.HTTP_403_FORBIDDEN,
    ErrorCode.NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorCode.ALREADY_USED: status.HTTP_409_CONFLICT,
    ErrorCode.TRANSIENT_FAILURE: status.HTTP_503_SERVICE_UNAVAILABLE,
}

INVALID_STATUS = {
    ErrorCode.MALFORMED_CREDENTIAL: status.HTTP_400_BAD_REQUEST,
    ErrorCode.NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorCode.TRANSIENT_FAILURE: status.HTTP_503_SERVICE_UNAVAILABLE,
}


def _error(code: ErrorCode) -> dict:
    return {"code": code.value, "error": USER_MESSAGES[code]}


def _rejection_response(request: Request, rejected: Rejected) -> Response:
    if rejected.reason is ErrorCode.UNAUTHORIZED and viewer_identity(request) is None:
        return Response(_error(rejected.reason), status=status.HTTP_401_UNAUTHORIZED)
    body = _error(rejected.reason)
    if rejected.order is not None:
        body["order"] = OrderSerializer(rejected.order).data
    return Response(body, status=REJECTION_STATUS[rejected.reason])


class ValidateTicketView(APIView):
    """Handler for POST /api/validate-ticket"""

    def post(self, request: Request) -> Response:
        serializer = CredentialSerializer(data=request.data)
        if not serializer.is_valid():
            return Response(
                {"isValid": False, **_error(ErrorCode.MALFORMED_CREDENTIAL)},
                status=status.HTTP_400_BAD_REQUEST,
            )
        data = serializer.validated_data
        credential = Credential(
            event_id=data["eventId"],
            order_id=data["orderId"],
            organizer_id=data["organizerId"],
        )

        try:
            result = dependencies.get_validator().validate(credential, viewer_identity(request))
        except Exception:
            logger.exception("Error validating ticket")
            return Response(
                {"isValid": False, "error": INTERNAL_ERROR},
                status=status.HTTP_500_INTERNAL_SERVER_ERROR,
            )

        if isinstance(result, Invalid):
            if result.reason is ErrorCode.TRANSIENT_FAILURE:
                return Response(
                    {"isValid": False, **_error(result.reason)},
                    status=status.HTTP_500_INTERNAL_SERVER_ERROR,
                )
            return Response(
                {"isValid": False, **_error(result.reason)},
                status=status.HTTP_400_BAD_REQUEST,
            )
        return Response({"isValid": True, "ticketInfo": TicketInfoSerializer(result).data})


class TicketInfoView(APIView):
    """Handler for GET /ticket-info?data=<percent-encoded credential>"""

    def get(self, request: Request) -> Response:
        token = request.query_params.get(credentials.QUERY_PARAM)
        if not token:
            return Response(_error(ErrorCode.MALFORMED_CREDENTIAL), status=status.HTTP_400_BAD_REQUEST)

        viewer = viewer_identity(request)
        result = dependencies.get_validator().validate(token, viewer)
        if isinstance(result, Invalid):
            return Response(_error(result.reason), status=INVALID_STATUS[result.reason])
        return Response(TicketPageSerializer(present(result, viewer)).data)


class RedeemOrderView(APIView):
    """Handler for POST /api/orders/{order_id}/redeem"""

    def post(self, request: Request, order_id: str) -> Response:
        result = dependencies.get_redemption_service().redeem(order_id, viewer_identity(request))
        if isinstance(result, Rejected):
            return _rejection_response(request, result)
        return Response({"order": OrderSerializer(result.order).data})


class OrderTicketView(APIView):
    """Handler for GET /api/orders/{order_id}/ticket"""

    def get(self, request: Request, order_id: str) -> Response:
        result = dependencies.get_issuer().issue(order_id, viewer_identity(request))
        if isinstance(result, Rejected):
            return _rejection_response(request, result)
        return Response(IssuedTicketSerializer(result).data)


class OrderTicketQRView(APIView):
    """Handler for GET /api/orders/{order_id}/qr.png"""

    def get(self, request: Request, order_id: str):
        result = dependencies.get_issuer().issue(order_id, viewer_identity(request))
        if isinstance(result, Rejected):
            return _rejection_response(request, result)
        png = credentials.qr_png(
            result.url,
            box_size=get_setting("QR_BOX_SIZE"),
            border=get_setting("QR_BORDER"),
        )
        return HttpResponse(png, content_type="image/png")

