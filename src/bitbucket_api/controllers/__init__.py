"""Resource controllers for bitbucket_api.

Each controller exposes the operations of one API resource as typed
methods and delegates every call to
:class:`~bitbucket_api.client.BitbucketClient`:

- :class:`AccountController` / :class:`EmailsController` -- the
  authenticated account.
- :class:`UsersController` -- any user by name.
- :class:`RepositoriesController` -- repositories by ``owner/slug``.
- :class:`IssuesController` -- the issue tracker of one repository.
"""

from bitbucket_api.controllers.account import AccountController, EmailsController
from bitbucket_api.controllers.base import Controller
from bitbucket_api.controllers.issues import IssuesController
from bitbucket_api.controllers.repositories import RepositoriesController
from bitbucket_api.controllers.users import UsersController

__all__ = [
    "AccountController",
    "Controller",
    "EmailsController",
    "IssuesController",
    "RepositoriesController",
    "UsersController",
]
