"""
Opens a dependency-update merge request on a GitLab project
"""

import base64
import logging
import os
import sys

import configargparse

from . import gitlab
from .creator import MergeRequestCreator
from .dependency_file import DependencyFile
from .labeler import Labeler
from .source import Source
from .user import User


class UpdateBotCliArgError(Exception):
    pass


def submodule_pointer(str_pointer):
    path, sep, sha = str_pointer.partition('=')
    if not sep or not path or not sha:
        raise configargparse.ArgumentTypeError('Invalid submodule (e.g. path/to/module=SHA): %s' % str_pointer)
    return path, sha


def _parse_config(args):
    parser = configargparse.ArgParser(
        auto_env_var_prefix='UPDATEBOT_',
        ignore_unknown_config_file_keys=True,  # Don't parse unknown args
        config_file_parser_class=configargparse.YAMLConfigFileParser,
        formatter_class=configargparse.ArgumentDefaultsRawHelpFormatter,
        description=__doc__,
    )
    parser.add_argument(
        '--config-file',
        env_var='UPDATEBOT_CONFIG_FILE',
        type=str,
        is_config_file=True,
        help='config file path',
    )
    auth_token_group = parser.add_mutually_exclusive_group(required=True)
    auth_token_group.add_argument(
        '--auth-token',
        type=str,
        metavar='TOKEN',
        help=(
            'Your GitLab token.\n'
            'DISABLED because passing credentials on the command line is insecure:\n'
            'You can still set it via ENV variable or config file, or use "--auth-token-file" flag.\n'
        ),
    )
    auth_token_group.add_argument(
        '--auth-token-file',
        type=configargparse.FileType('rt'),
        metavar='FILE',
        help='Path to your GitLab token file.\n',
    )
    parser.add_argument(
        '--gitlab-url',
        type=str,
        required=True,
        metavar='URL',
        help='Your GitLab instance, e.g. "https://gitlab.example.com".\n',
    )
    parser.add_argument(
        '--repo',
        type=str,
        required=True,
        metavar='GROUP/PROJECT',
        help='Project to open the merge request on.\n',
    )
    parser.add_argument(
        '--target-branch',
        type=str,
        default=None,
        help='Branch to merge into (defaults to the project\'s default branch).\n',
    )
    parser.add_argument(
        '--branch-name',
        type=str,
        required=True,
        help='Branch the update is pushed to.\n',
    )
    parser.add_argument(
        '--base-commit',
        type=str,
        required=True,
        metavar='SHA',
        help='Commit the update branch is created from.\n',
    )
    parser.add_argument(
        '--commit-message',
        type=str,
        required=True,
        help='Message of the update commit.\n',
    )
    parser.add_argument(
        '--title',
        type=str,
        required=True,
        help='Title of the merge request.\n',
    )
    description_group = parser.add_mutually_exclusive_group(required=False)
    description_group.add_argument(
        '--description',
        type=str,
        default='',
        help='Description of the merge request.\n',
    )
    description_group.add_argument(
        '--description-file',
        type=configargparse.FileType('rt'),
        metavar='FILE',
        help='Read the merge request description from FILE.\n',
    )
    parser.add_argument(
        '--files-root',
        type=str,
        default='.',
        metavar='DIR',
        help='Local checkout the --file contents are read from.\n',
    )
    parser.add_argument(
        '--file',
        dest='files',
        action='append',
        default=[],
        metavar='PATH',
        help='Repository path of a changed file (repeatable).\n',
    )
    parser.add_argument(
        '--new-file',
        dest='new_files',
        action='append',
        default=[],
        metavar='PATH',
        help='Repository path of a file the update adds (repeatable).\n',
    )
    parser.add_argument(
        '--deleted-file',
        dest='deleted_files',
        action='append',
        default=[],
        metavar='PATH',
        help='Repository path of a file the update removes (repeatable).\n',
    )
    parser.add_argument(
        '--submodule',
        dest='submodules',
        type=submodule_pointer,
        action='append',
        default=[],
        metavar='PATH=SHA',
        help='Move the submodule at PATH to SHA (repeatable).\n',
    )
    parser.add_argument(
        '--author-name',
        type=str,
        default=None,
        help='Commit author name (defaults to the token owner).\n',
    )
    parser.add_argument(
        '--author-email',
        type=str,
        default=None,
        help='Commit author email (defaults to the token owner).\n',
    )
    parser.add_argument(
        '--approver',
        dest='approvers',
        type=int,
        action='append',
        default=[],
        metavar='USER_ID',
        help='Approver to add to the merge request (repeatable).\n',
    )
    parser.add_argument(
        '--approver-group',
        dest='approver_groups',
        type=int,
        action='append',
        default=[],
        metavar='GROUP_ID',
        help='Approver group to add to the merge request (repeatable).\n',
    )
    parser.add_argument(
        '--assignee',
        type=str,
        default=None,
        metavar='USER_ID|USERNAME',
        help='Assign the merge request to this user.\n',
    )
    parser.add_argument(
        '--milestone',
        type=int,
        default=None,
        metavar='MILESTONE_ID',
        help='Milestone of the merge request.\n',
    )
    parser.add_argument(
        '--label',
        dest='labels',
        action='append',
        default=[],
        metavar='NAME',
        help='Label the merge request (repeatable); default is "dependencies".\n',
    )
    parser.add_argument(
        '--debug',
        action='store_true',
        help='Debug logging (includes all HTTP requests etc).\n',
    )
    config = parser.parse_args(args)

    if not (config.files or config.new_files or config.deleted_files or config.submodules):
        raise UpdateBotCliArgError('Nothing to commit: give at least one --file, --deleted-file or --submodule')
    if bool(config.author_name) != bool(config.author_email):
        raise UpdateBotCliArgError('--author-name and --author-email go together')

    cli_args = []
    # pylint: disable=protected-access
    for _, (_, value) in parser._source_to_settings.get(configargparse._COMMAND_LINE_SOURCE_KEY, {}).items():
        cli_args.extend(value)
    if any(arg == '--auth-token' or arg.startswith('--auth-token=') for arg in cli_args):
        raise UpdateBotCliArgError('"--auth-token" can only be set via ENV var or config file.')
    return config


def _read_file(files_root, path, operation):
    with open(os.path.join(files_root, path.lstrip('/')), 'rb') as local_file:
        raw = local_file.read()
    try:
        content, encoding = raw.decode('utf-8'), 'text'
    except UnicodeDecodeError:
        content, encoding = base64.b64encode(raw).decode('ascii'), 'base64'
    return DependencyFile(path, content, operation=operation, content_encoding=encoding)


def dependency_files(options):
    files = [_read_file(options.files_root, path, 'update') for path in options.files]
    files += [_read_file(options.files_root, path, 'create') for path in options.new_files]
    files += [DependencyFile(path, operation='delete') for path in options.deleted_files]
    files += [DependencyFile(path, sha, type='submodule') for path, sha in options.submodules]
    return files


def resolve_assignee(assignee, api):
    if assignee is None or assignee.isdigit():
        return None if assignee is None else int(assignee)

    user = User.fetch_by_username(assignee, api)
    if user is None:
        raise UpdateBotCliArgError('No GitLab user called %r' % assignee)
    return user.id


def main(args=None):
    if args is None:
        args = sys.argv[1:]
    logging.basicConfig(level=logging.INFO)

    options = _parse_config(args)

    if options.debug:
        logging.getLogger().setLevel(logging.DEBUG)
    else:
        logging.getLogger("requests").setLevel(logging.WARNING)

    auth_token = options.auth_token or options.auth_token_file.readline().strip()
    description = options.description_file.read() if options.description_file else options.description

    source = Source(
        'gitlab', options.repo,
        branch=options.target_branch,
        api_endpoint=options.gitlab_url.rstrip('/') + '/api/v4',
    )
    api = gitlab.Api(source.gitlab_url, auth_token)
    author_details = None
    if options.author_email:
        author_details = {'name': options.author_name, 'email': options.author_email}

    creator = MergeRequestCreator(
        api=api,
        source=source,
        branch_name=options.branch_name,
        base_commit=options.base_commit,
        files=dependency_files(options),
        commit_message=options.commit_message,
        pr_description=description,
        pr_name=options.title,
        author_details=author_details,
        labeler=Labeler(api, source.repo, custom_labels=options.labels),
        approvers=options.approvers,
        approver_groups=options.approver_groups,
        assignee=resolve_assignee(options.assignee, api),
        milestone=options.milestone,
    )
    merge_request = creator.create()
    if merge_request is None:
        logging.info('Branch %s already has a merge request; left it alone', options.branch_name)
    return merge_request
