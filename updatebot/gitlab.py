import enum
import json
import logging as log
from collections import namedtuple
from urllib.parse import quote as _url_quote

import requests


class Api:
    def __init__(self, gitlab_url, auth_token):
        self._auth_token = auth_token
        self._api_base_url = gitlab_url.rstrip('/') + '/api/v4'

    def call(self, command):
        method = command.method
        url = self._api_base_url + command.endpoint
        headers = {'PRIVATE-TOKEN': self._auth_token}
        log.debug('REQUEST: %s %s %r', method.__name__.upper(), url, command.call_args)
        # Timeout so a stuck request fails the run instead of hanging it; nothing is retried.
        try:
            response = method(url, headers=headers, timeout=60, **command.call_args)
        except requests.exceptions.Timeout as err:
            log.error('Request timeout: %s', err)
            raise
        log.debug('RESPONSE CODE: %s', response.status_code)
        log.debug('RESPONSE BODY: %r', response.content)

        if response.status_code == 202:
            return True  # Accepted

        if response.status_code == 204:
            return True  # NoContent

        if response.status_code < 300:
            return command.extract(response.json()) if command.extract else response.json()

        if response.status_code == 304:
            return False  # Not Modified

        errors = {
            400: BadRequest,
            401: Unauthorized,
            403: Forbidden,
            404: NotFound,
            405: MethodNotAllowed,
            406: NotAcceptable,
            409: Conflict,
            422: Unprocessable,
            429: TooManyRequests,
            500: InternalServerError,
            504: GatewayTimeout,
        }

        def other_error(code, msg):
            exception = InternalServerError if 500 < code < 600 else UnexpectedError
            return exception(code, msg)

        error = errors.get(response.status_code, other_error)
        try:
            err_message = response.json()
        except json.JSONDecodeError:
            err_message = response.reason

        raise error(response.status_code, err_message)

    def probe(self, command):
        """Look something up, telling "not there" apart from "went wrong".

        GitLab answers 404 for a resource that does not exist; that is a
        normal answer to an existence check and comes back as
        ``Presence.absent``. Any other API error is kept on the probe.
        """
        try:
            value = self.call(command)
        except NotFound:
            return Probe(Presence.absent, None, None)
        except ApiError as err:
            return Probe(Presence.failed, None, err)
        return Probe(Presence.present, value, None)

    def collect_all_pages(self, get_command):
        result = []
        fetch_again, page_no = True, 1
        while fetch_again:
            page = self.call(get_command.for_page(page_no))
            if page:
                result.extend(page)
                page_no += 1
            else:
                fetch_again = False

        return result


def quote(value):
    """Encode a project path, branch or file path as a single URL segment."""
    return _url_quote(str(value), safe='')


def from_singleton_list(fun=None):
    fun = fun or (lambda x: x)

    def extractor(response_list):
        assert isinstance(response_list, list), type(response_list)
        assert len(response_list) <= 1, len(response_list)
        if not response_list:
            return None
        return fun(response_list[0])

    return extractor


class Command(namedtuple('Command', 'endpoint args extract')):
    def __new__(cls, endpoint, args=None, extract=None):
        return super(Command, cls).__new__(cls, endpoint, args or {}, extract)

    @property
    def call_args(self):
        return {'json': self.args}


class GET(Command):
    @property
    def method(self):
        return requests.get

    @property
    def call_args(self):
        return {'params': _prepare_params(self.args)}

    def for_page(self, page_no):
        args = self.args
        return self._replace(args=dict(args, page=page_no, per_page=100))


class PUT(Command):
    @property
    def method(self):
        return requests.put


class POST(Command):
    @property
    def method(self):
        return requests.post


def _prepare_params(params):
    def process(val):
        if isinstance(val, bool):
            return 'true' if val else 'false'
        return str(val)

    return {key: process(val) for key, val in params.items()}


@enum.unique
class Presence(enum.Enum):
    present = 'present'
    absent = 'absent'
    failed = 'failed'


class Probe(namedtuple('Probe', 'presence value error')):
    __slots__ = ()

    @property
    def present(self):
        return self.presence is Presence.present

    @property
    def absent(self):
        return self.presence is Presence.absent

    @property
    def failed(self):
        return self.presence is Presence.failed

    def raise_for_failure(self):
        if self.failed:
            raise self.error


class ApiError(Exception):
    @property
    def status_code(self):
        return self.args[0] if self.args else None

    @property
    def error_message(self):
        args = self.args
        if len(args) != 2:
            return None

        arg = args[1]
        if isinstance(arg, dict):
            return arg.get('message')
        return arg


class BadRequest(ApiError):
    pass


class Unauthorized(ApiError):
    pass


class Forbidden(ApiError):
    pass


class NotFound(ApiError):
    pass


class MethodNotAllowed(ApiError):
    pass


class NotAcceptable(ApiError):
    pass


class Conflict(ApiError):
    pass


class Unprocessable(ApiError):
    pass


class TooManyRequests(ApiError):
    pass


class InternalServerError(ApiError):
    pass


class GatewayTimeout(ApiError):
    pass


class UnexpectedError(ApiError):
    pass


class Resource:
    def __init__(self, api, info):
        self._info = info
        self._api = api

    @property
    def info(self):
        return self._info

    @property
    def id(self):  # pylint: disable=invalid-name
        return self.info['id']

    @property
    def api(self):
        return self._api

    def __repr__(self):
        return '{0.__class__.__name__}({0._api}, {0.info})'.format(self)
