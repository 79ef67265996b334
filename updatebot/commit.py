from . import gitlab


GET, POST, PUT = gitlab.GET, gitlab.POST, gitlab.PUT


class Commit(gitlab.Resource):

    @classmethod
    def on_branch(cls, project_id, branch, api):
        """Most recent commits on `branch`, newest first (first page only)."""
        commits_info = api.call(GET(
            '/projects/{project_id}/repository/commits'.format(project_id=gitlab.quote(project_id)),
            {'ref_name': branch},
        ))
        return [cls(api, commit_info) for commit_info in commits_info]

    @classmethod
    def create(cls, api, project_id, branch, message, actions, author=None):
        params = {
            'branch': branch,
            'commit_message': message,
            'actions': actions,
        }
        if author:
            if author.get('email'):
                params['author_email'] = author['email']
            if author.get('name'):
                params['author_name'] = author['name']

        info = api.call(POST(
            '/projects/{project_id}/repository/commits'.format(project_id=gitlab.quote(project_id)),
            params,
        ))
        return cls(api, info)

    @classmethod
    def update_submodule(cls, api, project_id, path, branch, sha, message):
        info = api.call(PUT(
            '/projects/{project_id}/repository/submodules/{path}'.format(
                project_id=gitlab.quote(project_id),
                path=gitlab.quote(path),
            ),
            {'branch': branch, 'commit_sha': sha, 'commit_message': message},
        ))
        return cls(api, info)

    @property
    def message(self):
        return self.info['message']
