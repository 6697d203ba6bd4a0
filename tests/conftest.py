"""Builders for small GitHub-like dependents listing pages."""

import pytest

ROW_TEMPLATE = """
<div class="Box-row d-flex flex-items-center">
  <img class="avatar mr-2" src="https://avatars.example/{user}.png" alt="@{user}">
  <span class="f5 color-fg-muted">
    <a data-hovercard-type="{user_type}" href="/{user}">{user}</a> /
    <a class="text-bold" data-hovercard-type="repository" href="/{project}">{project}</a>
  </span>
  <div class="d-flex flex-auto flex-justify-end">
    <span class="color-fg-muted text-bold pl-3">
      <svg class="octicon octicon-star" height="16" width="16"></svg>
      {stars}
    </span>
    <span class="color-fg-muted text-bold pl-3">
      <svg class="octicon octicon-repo-forked" height="16" width="16"></svg>
      {forks}
    </span>
  </div>
</div>
"""


def make_row(user, project, stars, forks, user_type="user"):
    return ROW_TEMPLATE.format(
        user=user, project=project, stars=stars, forks=forks, user_type=user_type
    )


def make_page(rows, next_href=None, prev_href=None):
    if prev_href:
        prev = f'<a class="btn BtnGroup-item" href="{prev_href}">Previous</a>'
    else:
        prev = '<button class="btn BtnGroup-item" disabled="disabled">Previous</button>'
    if next_href:
        nxt = f'<a class="btn BtnGroup-item" href="{next_href}">Next</a>'
    else:
        nxt = '<button class="btn BtnGroup-item" disabled="disabled">Next</button>'
    return f"""
<html>
  <body>
    <div id="dependents">
      <div class="Box">
        <div class="Box-header">Repositories</div>
        {''.join(rows)}
      </div>
      <div class="paginate-container">
        <div class="BtnGroup">
          {prev}
          {nxt}
        </div>
      </div>
    </div>
  </body>
</html>
"""


@pytest.fixture
def listing_row():
    return make_row


@pytest.fixture
def listing_page():
    return make_page
