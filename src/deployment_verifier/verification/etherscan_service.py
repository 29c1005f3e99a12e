"""
Etherscan Verification Service

Submits contracts to an Etherscan-compatible explorer API (v2, multichain)
and polls the verification status until the explorer reaches a verdict.
"""

import json
import logging
import time
from typing import Any, Callable, Dict, Optional, Sequence

import requests

from ..errors import VerificationError
from .abi_encoding import encode_constructor_args
from .build_info import BuildInfoStore
from .service import VerificationService

logger = logging.getLogger(__name__)

STATUS_OK = "1"
PENDING_RESULT = "Pending in queue"
PASS_PREFIX = "Pass"


class EtherscanVerificationService(VerificationService):
    """Verification backend talking to an Etherscan-compatible HTTP API."""

    def __init__(self,
                 api_key: str,
                 chain_id: int,
                 build_info: BuildInfoStore,
                 api_url: str = "https://api.etherscan.io/v2/api",
                 request_timeout: float = 30.0,
                 poll_interval: float = 5.0,
                 max_polls: int = 12,
                 session: Optional[requests.Session] = None,
                 sleep: Callable[[float], None] = time.sleep):
        """
        Initialize the Etherscan service.

        Args:
            api_key: Explorer API key
            chain_id: Chain the contracts are deployed on
            build_info: Source of compiler input and ABI per contract
            api_url: Explorer API endpoint
            request_timeout: Timeout for each HTTP request, in seconds
            poll_interval: Delay between status checks, in seconds
            max_polls: Number of status checks before giving up
            session: HTTP session to use (a new one by default)
            sleep: Delay function, replaceable for tests
        """
        self.api_key = api_key
        self.chain_id = chain_id
        self.build_info = build_info
        self.api_url = api_url
        self.request_timeout = request_timeout
        self.poll_interval = poll_interval
        self.max_polls = max_polls
        self.session = session or requests.Session()
        self.sleep = sleep

    def verify(self, address: str, constructor_args: Sequence[Any], source_ref: str) -> None:
        compiler_input = self.build_info.lookup(source_ref)
        encoded_args = encode_constructor_args(
            compiler_input.constructor_input_types(), constructor_args
        )

        guid = self._submit({
            'module': 'contract',
            'action': 'verifysourcecode',
            'apikey': self.api_key,
            'contractaddress': address,
            'sourceCode': json.dumps(compiler_input.standard_json_input),
            'codeformat': 'solidity-standard-json-input',
            'contractname': source_ref,
            'compilerversion': compiler_input.compiler_version,
            'constructorArguements': encoded_args,
        })
        logger.info("Submitted %s for verification (guid %s)", address, guid)

        self._wait_for_verdict(address, guid)

    def _request(self, method: str, **kwargs) -> Dict[str, Any]:
        try:
            response = self.session.request(
                method,
                self.api_url,
                params={'chainid': self.chain_id, **kwargs.pop('params', {})},
                timeout=self.request_timeout,
                **kwargs
            )
            response.raise_for_status()
            payload = response.json()
        except requests.RequestException as e:
            raise VerificationError(f"Explorer request failed: {e}") from e
        except ValueError as e:
            raise VerificationError(f"Explorer returned invalid JSON: {e}") from e

        if not isinstance(payload, dict):
            raise VerificationError(f"Unexpected explorer response: {payload!r}")
        return payload

    def _submit(self, form: Dict[str, Any]) -> str:
        payload = self._request('POST', data=form)
        result = str(payload.get('result', ''))
        if payload.get('status') != STATUS_OK:
            raise VerificationError(result or str(payload.get('message', 'Submission rejected')))
        return result

    def _wait_for_verdict(self, address: str, guid: str) -> None:
        for attempt in range(1, self.max_polls + 1):
            self.sleep(self.poll_interval)

            payload = self._request('GET', params={
                'module': 'contract',
                'action': 'checkverifystatus',
                'guid': guid,
                'apikey': self.api_key,
            })
            result = str(payload.get('result', ''))

            if result == PENDING_RESULT:
                logger.debug("Verification of %s pending (check %d/%d)", address, attempt, self.max_polls)
                continue
            if result.startswith(PASS_PREFIX):
                return
            raise VerificationError(result or "Verification failed")

        raise VerificationError(
            f"Verification of {address} still pending after {self.max_polls} status checks (guid {guid})"
        )
