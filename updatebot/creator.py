import logging as log

from .branch import Branch
from .commit import Commit
from .merge_request import MergeRequest
from .project import Project


class MergeRequestCreator:
    """Makes sure a merge request exists for one dependency update.

    Every step checks the remote first, so running it again for the same
    branch never duplicates a commit or a merge request.
    """

    def __init__(
            self, *, api, source, branch_name, base_commit, files,
            commit_message, pr_description, pr_name,
            author_details=None, labeler=None,
            approvers=None, approver_groups=None, assignee=None, milestone=None,
    ):
        self._api = api
        self._source = source
        self._branch_name = branch_name
        self._base_commit = base_commit
        self._files = list(files)
        self._commit_message = commit_message
        self._pr_description = pr_description
        self._pr_name = pr_name
        self._author_details = author_details
        self._labeler = labeler
        self._approvers = list(approvers or [])
        self._approver_groups = list(approver_groups or [])
        self._assignee = assignee
        self._milestone = milestone
        self._project = None

    @property
    def repo(self):
        return self._source.repo

    @property
    def project(self):
        if self._project is None:
            self._project = Project.fetch_by_path(self.repo, self._api)
        return self._project

    @property
    def target_branch(self):
        return self._source.branch or self.project.default_branch

    def create(self):
        """Returns the new MergeRequest, or None if the branch already has one."""
        branch = Branch.probe(self.repo, self._branch_name, self._api)
        branch.raise_for_failure()

        if branch.present:
            if self.merge_request_exists():
                log.info(
                    'A merge request from %s to %s already exists, nothing to do',
                    self._branch_name, self.target_branch,
                )
                return None

            if self.commit_exists():
                log.info('Branch %s already has the update commit', self._branch_name)
            else:
                self.create_commit()
        else:
            self.create_branch()
            self.create_commit()

        if self._labeler is not None:
            self._labeler.create_default_labels_if_required()

        merge_request = self.create_merge_request()
        self.annotate_merge_request(merge_request)
        return merge_request

    def merge_request_exists(self):
        merge_requests = MergeRequest.search(self._api, self.repo, {
            'source_branch': self._branch_name,
            'target_branch': self.target_branch,
            'state': 'all',
        })
        return bool(merge_requests)

    def commit_exists(self):
        # same message on the newest commit means the update is already there
        commits = Commit.on_branch(self.repo, self._branch_name, self._api)
        return bool(commits) and commits[0].message == self._commit_message

    def create_branch(self):
        log.info('Creating branch %s from %s', self._branch_name, self._base_commit)
        return Branch.create(self._api, self.repo, self._branch_name, self._base_commit)

    def create_commit(self):
        submodules = [dep_file for dep_file in self._files if dep_file.submodule]
        others = [dep_file for dep_file in self._files if not dep_file.submodule]

        for submodule in submodules:
            log.info('Moving submodule %s to %s on %s', submodule.path, submodule.content, self._branch_name)
            Commit.update_submodule(
                self._api, self.repo, submodule.path,
                branch=self._branch_name,
                sha=submodule.content,
                message=self._commit_message,
            )

        if others:
            log.info('Committing %d file(s) to %s', len(others), self._branch_name)
            Commit.create(
                self._api, self.repo, self._branch_name, self._commit_message,
                [dep_file.commit_action() for dep_file in others],
                author=self._author_details,
            )

    def create_merge_request(self):
        params = {
            'source_branch': self._branch_name,
            'target_branch': self.target_branch,
            'title': self._pr_name,
            'description': self._pr_description,
            'remove_source_branch': True,
        }
        if self._assignee is not None:
            params['assignee_id'] = self._assignee
        if self._milestone is not None:
            params['milestone_id'] = self._milestone
        if self._labeler is not None:
            labels = self._labeler.labels_for_merge_request()
            if labels:
                params['labels'] = ','.join(labels)

        merge_request = MergeRequest.create(self._api, self.repo, params)
        log.info('Created merge request !%s: %s', merge_request.iid, merge_request.web_url)
        return merge_request

    def annotate_merge_request(self, merge_request):
        if self._approvers or self._approver_groups:
            log.info('Adding approvers to merge request !%s', merge_request.iid)
            merge_request.set_approvers(self._approvers, self._approver_groups)
