"""Shared pytest fixtures for Human tests."""

from pathlib import Path

import pytest

from human.core import ir
from human.core.builder import compile_source
from human.core.parser import Program, parse_source

TASKFLOW_SOURCE = """\
app TaskFlow is a web application

── Data ──

data User:
  has a name which is text
  has an email which is unique email
  has an optional bio which is text
  has a role which is either "user" or "admin"
  has many Task

data Task:
  has a title which is text
  has a status which is text and defaults to "pending"
  belongs to a User
  has many Tag through TaskTag

── Frontend ──

page Dashboard:
  show a list of tasks
  clicking a task navigates to TaskDetail

component TaskCard:
  accepts task as Task
  show the task title

── Backend ──

api SignUp:
  accepts name, email, and password
  check that name is not empty
  check that password is at least 8 characters
  create a User with the given fields
  respond with the created user

api DeleteTask:
  requires authentication
  accepts task_id
  check that current user is the owner or an admin
  delete the Task
  respond with success

policy FreeUser:
  can create up to 50 tasks per month
  can view only their own tasks
  cannot delete completed tasks

when a user signs up:
  send welcome email to the user

when code is pushed to main:
  run all tests
  deploy to staging

── Design ──

theme:
  design system is Material UI
  primary color is #6C5CE7
  font is Inter for body and Poppins for headings
  border radius is smooth
  spacing is comfortable
  dark mode is supported
  animations are subtle

── Security ──

authentication:
  method JWT tokens that expire in 7 days
  method Google OAuth with redirect to /auth/google/callback
  rate limit all endpoints to 100 requests per minute

database:
  use PostgreSQL
  index Task by user and status
  backup daily at 3am

integrate with SendGrid:
  api key from environment variable SENDGRID_API_KEY
  template "welcome"
  use for sending transactional emails

environment staging:
  url is staging.taskflow.example.com
  use smaller instances

if database is unreachable:
  retry 3 times
  alert the on-call engineer

build with:
  frontend using React with TypeScript
  backend using Node with Express
  database using PostgreSQL
  deploy to Docker

track response times
alert on Slack if error rate exceeds 5 percent
log all api requests to CloudWatch
keep logs for 30 days
"""


@pytest.fixture
def taskflow_source() -> str:
    """Return a .human source exercising every block kind."""
    return TASKFLOW_SOURCE


@pytest.fixture
def taskflow_program(taskflow_source: str) -> Program:
    """Return the statement tree for the sample source."""
    return parse_source(taskflow_source, Path("taskflow.human"))


@pytest.fixture
def taskflow_app(taskflow_source: str) -> ir.Application:
    """Return the built Application for the sample source."""
    return compile_source(taskflow_source, Path("taskflow.human"))


@pytest.fixture
def taskflow_file(tmp_path: Path, taskflow_source: str) -> Path:
    """Write the sample source to a temporary app.human."""
    path = tmp_path / "app.human"
    path.write_text(taskflow_source, encoding="utf-8")
    return path
