"""
Membership service API client.
"""

from urllib.parse import quote

from membercard.api.base_api import BaseAPI
from membercard.config.types import MemberCardApiConfig
from membercard.exceptions import APIResponseError


class MemberCardAPI(BaseAPI):
    """Client for the membership lookup endpoint.

    ``request_url`` is a template with a ``{member_id}`` placeholder, e.g.
    ``https://members.example.org/api/v1/members/{member_id}``.
    """
    
    def __init__(self, request_url: str, bearer_token: str, timeout: float | None = None):
        super().__init__(
            headers={
                'Accept': 'application/json',
                'Content-Type': 'application/json',
                'Authorization': f'Bearer {bearer_token}'
            },
            timeout=timeout
        )
        self.request_url = request_url
    
    @classmethod
    def from_config(cls, config: MemberCardApiConfig) -> "MemberCardAPI":
        return cls(config.request_url, config.bearer_token, timeout=config.timeout)
    
    def member_url(self, member_id: str) -> str:
        return self.request_url.format(member_id=quote(member_id, safe=""))
    
    def lookup_member(self, member_id: str, zip_code: str) -> bytes:
        """Look up a membership card.

        Args:
            member_id: Membership identifier, sent as given
            zip_code: Postal code, sent as the ``zip`` body field

        Returns:
            Raw response body

        Raises:
            APIError: On network errors or non-2xx responses
        """
        self.debug("Requesting member card", member_id=member_id)
        response = self._send('POST', self.member_url(member_id), data={'zip': zip_code})
        if response.content is None:
            raise APIResponseError("Member card response has no body", response=response)
        return response.content
