from collections import namedtuple


class Source(namedtuple('Source', 'provider repo branch api_endpoint')):
    """Where the update goes: a provider and a "group/project" path.

    `branch` is the merge request's target; None means the project's default branch.
    """
    __slots__ = ()

    def __new__(cls, provider, repo, branch=None, api_endpoint=None):
        if provider != 'gitlab':
            raise ValueError('Unsupported provider: %r' % provider)
        return super(Source, cls).__new__(
            cls, provider, repo, branch, api_endpoint or 'https://gitlab.com/api/v4',
        )

    @property
    def gitlab_url(self):
        """The instance URL `gitlab.Api` expects, i.e. without the `/api/v4` suffix."""
        endpoint = self.api_endpoint.rstrip('/')
        if endpoint.endswith('/api/v4'):
            endpoint = endpoint[:-len('/api/v4')]
        return endpoint
