"""Shared test setup: point the API layer at a fake Jenkins before import."""

import os

os.environ["JENKINS_URL"] = "http://jenkins.test"
