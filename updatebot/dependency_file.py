import posixpath
from collections import namedtuple


FILE_TYPES = ('file', 'submodule', 'symlink')
OPERATIONS = ('create', 'update', 'delete')


class DependencyFile(namedtuple('DependencyFile',
                                'name content directory type operation content_encoding symlink_target')):
    __slots__ = ()

    def __new__(
            cls, name, content=None, *,
            directory='/', type='file',  # pylint: disable=redefined-builtin
            operation='update', content_encoding='text', symlink_target=None,
    ):
        if type not in FILE_TYPES:
            raise ValueError('Unknown file type: %r' % type)
        if operation not in OPERATIONS:
            raise ValueError('Unknown file operation: %r' % operation)
        if type == 'symlink' and not symlink_target:
            raise ValueError('Symlink %r needs a symlink_target' % name)
        return super(DependencyFile, cls).__new__(
            cls, name, content, directory, type, operation, content_encoding, symlink_target,
        )

    @property
    def path(self):
        return _repo_path(posixpath.join(self.directory or '/', self.name))

    @property
    def submodule(self):
        return self.type == 'submodule'

    @property
    def deleted(self):
        return self.operation == 'delete'

    def commit_action(self):
        """The entry for this file in a multi-file commit's `actions` list."""
        assert not self.submodule, 'submodules are updated with their own call'

        if self.deleted:
            return {'action': 'delete', 'file_path': self.path}

        if self.type == 'symlink':
            # GitLab follows the link; write through to what it points at
            return {
                'action': 'update',
                'file_path': _repo_path(self.symlink_target),
                'content': self.content,
                'encoding': self.content_encoding,
            }

        return {
            'action': self.operation,
            'file_path': self.path,
            'content': self.content,
            'encoding': self.content_encoding,
        }


def _repo_path(path):
    return posixpath.normpath(path).lstrip('/')
