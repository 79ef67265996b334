import logging as log

from . import gitlab


GET, POST = gitlab.GET, gitlab.POST

DEFAULT_LABEL = 'dependencies'
DEFAULT_LABEL_COLOR = '#0366d6'
DEFAULT_LABEL_DESCRIPTION = 'Pull requests that update a dependency file'


class Labeler:
    """Works out which labels a dependency-update merge request gets.

    Custom labels win when given, but only the ones the project already has;
    otherwise the project's `dependencies` label is used, created on demand.
    """

    def __init__(self, api, project_id, custom_labels=None):
        self._api = api
        self._project_id = project_id
        self._custom_labels = list(custom_labels or [])
        self._labels = None

    @property
    def labels(self):
        if self._labels is None:
            self._labels = [
                label['name'] for label in self._api.collect_all_pages(GET(
                    '/projects/{project_id}/labels'.format(project_id=gitlab.quote(self._project_id)),
                ))
            ]
        return self._labels

    def create_default_labels_if_required(self):
        if self._custom_labels:
            return
        if self._find(DEFAULT_LABEL) is not None:
            return

        log.info('Creating the %r label', DEFAULT_LABEL)
        label_info = self._api.call(POST(
            '/projects/{project_id}/labels'.format(project_id=gitlab.quote(self._project_id)),
            {'name': DEFAULT_LABEL, 'color': DEFAULT_LABEL_COLOR, 'description': DEFAULT_LABEL_DESCRIPTION},
        ))
        self.labels.append(label_info['name'])

    def labels_for_merge_request(self):
        if self._custom_labels:
            found = [self._find(label) for label in self._custom_labels]
            missing = [label for label, match in zip(self._custom_labels, found) if match is None]
            if missing:
                log.warning('Ignoring labels the project does not have: %s', ', '.join(missing))
            return [match for match in found if match is not None]

        default = self._find(DEFAULT_LABEL)
        return [default] if default is not None else []

    def _find(self, name):
        for label in self.labels:
            if label.lower() == name.lower():
                return label
        return None
