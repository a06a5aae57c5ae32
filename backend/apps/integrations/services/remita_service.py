"""
Remita payment gateway integration.
Issues payment references (RRR) and queries their processor-side status.
"""
import hashlib
import json
import random
import re
from typing import Optional, Dict, Any
from urllib.parse import quote

import requests
from django.conf import settings

from apps.core.services.base import (
    BaseService, GatewayError, ServiceResult
)


class RemitaGatewayClient(BaseService):
    """
    Client for the Remita echannel merchant API.

    Every request is authorised with a SHA-512 token derived from the merchant
    credentials. Failures never escape as exceptions: public methods return a
    failed ServiceResult carrying the gateway error code.

    API Documentation: https://api.remita.net
    """

    # Endpoints
    ISSUE_PATH = "/remita/exapp/api/v1/send/api/echannelsvc/merchant/api/paymentinit"
    STATUS_PATH = "/remita/exapp/api/v1/send/api/echannelsvc/{merchant_id}/{rrr}/{token}/status.reg"

    # Processor status code for a successfully generated reference
    REFERENCE_GENERATED_CODE = "025"

    # Processor status codes -> local payment status
    STATUS_CODE_MAP = {
        '00': 'completed',
        '01': 'completed',
        '020': 'pending',
        '021': 'pending',
    }
    DEFAULT_STATUS = 'failed'

    AUTH_SCHEME = "remita"
    DEFAULT_TIMEOUT = 30

    # Remita wraps some responses as `jsonp ({...})`
    JSONP_PATTERN = re.compile(r'^\s*\w+\s*\((.*)\)\s*;?\s*$', re.DOTALL)

    def __init__(
        self,
        base_url: Optional[str] = None,
        merchant_id: Optional[str] = None,
        service_type_id: Optional[str] = None,
        api_key: Optional[str] = None,
        timeout: Optional[int] = None,
        use_mock: Optional[bool] = None,
        session: Optional[requests.Session] = None
    ):
        """Initialize the client from settings, allowing explicit overrides."""
        super().__init__()
        self.base_url = (base_url or settings.REMITA_API_BASE_URL).rstrip('/')
        self.merchant_id = merchant_id or settings.REMITA_MERCHANT_ID
        self.service_type_id = service_type_id or settings.REMITA_SERVICE_TYPE_ID
        self.api_key = api_key or settings.REMITA_API_KEY
        self.timeout = timeout or getattr(
            settings, 'REMITA_TIMEOUT', self.DEFAULT_TIMEOUT)
        self.use_mock = (
            use_mock if use_mock is not None
            else getattr(settings, 'REMITA_USE_MOCK', False)
        )

        self.session = session or requests.Session()
        self.session.headers.update({
            'Content-Type': 'application/json',
            'Accept': 'application/json'
        })

    # ==================== Signing ====================

    @staticmethod
    def _sha512(value: str) -> str:
        return hashlib.sha512(value.encode('utf-8')).hexdigest()

    def build_issue_token(self, order_id: str, amount: int) -> str:
        """SHA-512 of merchantId + serviceTypeId + orderId + amount + apiKey."""
        return self._sha512(
            f"{self.merchant_id}{self.service_type_id}{order_id}{amount}{self.api_key}"
        )

    def build_status_token(self, rrr: str) -> str:
        """SHA-512 of apiKey + rrr + merchantId."""
        return self._sha512(f"{self.api_key}{rrr}{self.merchant_id}")

    def build_authorization_header(self, token: str) -> str:
        return (
            f"{self.AUTH_SCHEME}ConsumerKey={self.merchant_id},"
            f"{self.AUTH_SCHEME}ConsumerToken={token}"
        )

    # ==================== Public API ====================

    def issue_reference(
        self,
        amount: int,
        payer_name: str,
        payer_email: str,
        payer_phone: str,
        description: str,
        order_id: str
    ) -> ServiceResult:
        """
        Ask Remita to issue a payment reference for an invoice.

        Args:
            amount: Positive integer amount
            payer_name: Full name of the payer
            payer_email: Payer email address
            payer_phone: Payer phone number
            description: Invoice description shown to the payer
            order_id: Local idempotency key for this invoice

        Returns:
            ServiceResult containing {'rrr', 'status_message'} or error
        """
        if isinstance(amount, bool) or not isinstance(amount, int) or amount <= 0:
            return ServiceResult.fail(
                "Amount must be a positive integer",
                error_code="INVALID_AMOUNT"
            )

        if self.use_mock:
            return self._issue_mock_reference(order_id)

        payload = {
            'serviceTypeId': self.service_type_id,
            'amount': str(amount),
            'orderId': order_id,
            'payerName': payer_name,
            'payerEmail': payer_email,
            'payerPhone': payer_phone,
            'description': description,
        }

        try:
            self.log_info(
                f"Requesting payment reference for order {order_id}",
                order_id=order_id,
                amount=amount,
                service_type_id=self.service_type_id
            )

            response = self._make_request(
                'POST',
                self.ISSUE_PATH,
                token=self.build_issue_token(order_id, amount),
                payload=payload
            )

            rrr = response.get('RRR')
            if response.get('statuscode') != self.REFERENCE_GENERATED_CODE or not rrr:
                raise GatewayError(
                    response.get('message') or response.get('status')
                    or "Remita rejected the reference request",
                    code="REFERENCE_REJECTED",
                    details={'statuscode': response.get('statuscode')}
                )

            self.log_info(
                f"Issued RRR {rrr} for order {order_id}",
                order_id=order_id,
                rrr=rrr
            )

            return ServiceResult.ok({
                'rrr': str(rrr).strip(),
                'status_message': response.get('status'),
            })

        except GatewayError as e:
            self.log_error(
                "Failed to issue payment reference",
                exception=e,
                order_id=order_id,
                error_code=e.code
            )
            return ServiceResult.from_exception(e)

    def query_status(self, rrr: str) -> ServiceResult:
        """
        Query the processor-side status of a reference.

        Returns:
            ServiceResult containing {'status', 'status_code', 'status_message'}
        """
        token = self.build_status_token(rrr)
        path = self.STATUS_PATH.format(
            merchant_id=self.merchant_id,
            # Single path segment; slashes and query characters are escaped
            rrr=quote(str(rrr), safe=''),
            token=token
        )

        try:
            response = self._make_request('GET', path, token=token)

            status_code = str(response.get('status', '')).strip()
            status = self.map_status(status_code)

            self.log_info(
                f"RRR {rrr} reported as {status} ({status_code})",
                rrr=rrr,
                status_code=status_code
            )

            return ServiceResult.ok({
                'status': status,
                'status_code': status_code,
                'status_message': response.get('message') or response.get('statusMessage'),
            })

        except GatewayError as e:
            self.log_error(
                f"Failed to query status for RRR {rrr}",
                exception=e,
                rrr=rrr,
                error_code=e.code
            )
            return ServiceResult.from_exception(e)

    def map_status(self, status_code: str) -> str:
        """Translate a processor status code into pending/completed/failed."""
        return self.STATUS_CODE_MAP.get(status_code, self.DEFAULT_STATUS)

    # ==================== Helpers ====================

    def _issue_mock_reference(self, order_id: str) -> ServiceResult:
        rrr = str(random.randint(10 ** 11, 10 ** 12 - 1))
        self.log_warning(
            f"Mock mode: generated RRR {rrr} for order {order_id}",
            order_id=order_id,
            rrr=rrr
        )
        return ServiceResult.ok({
            'rrr': rrr,
            'status_message': 'Payment Reference generated',
        })

    def _parse_body(self, text: str) -> Dict[str, Any]:
        match = self.JSONP_PATTERN.match(text or '')
        if match:
            text = match.group(1)

        try:
            data = json.loads(text)
        except ValueError:
            raise GatewayError(
                "Invalid JSON response from Remita",
                code="INVALID_RESPONSE",
                details={'body': (text or '')[:200]}
            )

        if not isinstance(data, dict):
            raise GatewayError(
                "Unexpected response shape from Remita",
                code="INVALID_RESPONSE"
            )
        return data

    def _make_request(
        self,
        method: str,
        path: str,
        token: str,
        payload: Optional[Dict] = None
    ) -> Dict[str, Any]:
        """
        Make a signed request to the Remita API.

        Args:
            method: HTTP method
            path: API path appended to the base URL
            token: SHA-512 token for the Authorization header
            payload: Optional JSON body

        Returns:
            Parsed response body

        Raises:
            GatewayError: on transport failure, non-2xx status or bad body
        """
        url = f"{self.base_url}{path}"

        try:
            response = self.session.request(
                method=method,
                url=url,
                json=payload,
                headers={'Authorization': self.build_authorization_header(token)},
                timeout=self.timeout
            )
            response.raise_for_status()

        except requests.exceptions.HTTPError as e:
            status_code = e.response.status_code if e.response is not None else None
            if status_code in (401, 403):
                raise GatewayError(
                    f"Unauthorized: Remita rejected merchant credentials ({status_code})",
                    code=f"HTTP_{status_code}"
                )
            raise GatewayError(
                f"Remita API error: {str(e)}",
                code=f"HTTP_{status_code}"
            )
        except requests.exceptions.Timeout:
            raise GatewayError("Remita API timeout", code="TIMEOUT")
        except requests.exceptions.ConnectionError as e:
            raise GatewayError(
                f"Remita network error: {str(e)}",
                code="NETWORK_ERROR"
            )
        except requests.exceptions.RequestException as e:
            raise GatewayError(
                f"Remita API error: {str(e)}",
                code="API_ERROR"
            )

        return self._parse_body(response.text)
