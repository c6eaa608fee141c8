#!/usr/bin/env python3
"""
Secure RESTful API walkthrough.

Drives a running server through the content-signing flow and reports
whether each step behaved as expected:
1. Login with the demo account
2. POST without a content signature (rejected)
3. Sign the post body
4. POST with the signed token (accepted)
5. POST a tampered body with the same token (rejected)
6. Fetch the created post
7. Delete it

Usage:
    python scripts/api_demo.py [--target URL] [--verbose]

Requirements:
    pip install requests
"""

import argparse
import json
import sys
from dataclasses import dataclass, field

import requests


@dataclass
class StepResult:
    """Outcome of one walkthrough step"""
    name: str
    passed: bool
    status_code: int
    details: str = ""


@dataclass
class DemoReport:
    target: str
    results: list[StepResult] = field(default_factory=list)

    def add(self, result: StepResult):
        self.results.append(result)

    @property
    def all_passed(self) -> bool:
        return all(r.passed for r in self.results)


class APIDemo:
    """Content-signing walkthrough against a live server"""

    def __init__(self, base_url: str, username: str, password: str, verbose: bool = False):
        self.base_url = base_url.rstrip("/")
        self.username = username
        self.password = password
        self.verbose = verbose
        self.session = requests.Session()
        self.report = DemoReport(target=self.base_url)

    def log(self, msg: str):
        if self.verbose:
            print(f"  [DEBUG] {msg}")

    def _url(self, path: str) -> str:
        return f"{self.base_url}{path}"

    def _record(self, name: str, response: requests.Response, expected: int) -> dict:
        try:
            body = response.json()
        except ValueError:
            body = {}
        passed = response.status_code == expected
        details = body.get("message") or body.get("error") or ""
        self.report.add(StepResult(name, passed, response.status_code, details))
        marker = "PASS" if passed else "FAIL"
        print(f"[{marker}] {name}: HTTP {response.status_code} (expected {expected}) {details}")
        self.log(json.dumps(body, indent=2))
        return body

    def _auth(self, token: str) -> dict:
        return {"Authorization": f"Bearer {token}"}

    def run(self) -> DemoReport:
        post_data = {
            "title": "My Secure Post",
            "content": "This post demonstrates the secure signing mechanism.",
        }

        resp = self.session.post(self._url("/auth/login"), json={
            "username": self.username,
            "password": self.password,
        }, timeout=10)
        body = self._record("Login", resp, 200)
        token = body.get("token")
        if not token:
            return self.report

        resp = self.session.post(self._url("/api/posts"), json=post_data, headers=self._auth(token), timeout=10)
        self._record("POST without content signature", resp, 400)

        resp = self.session.post(self._url("/auth/sign-content"), json=post_data, headers=self._auth(token), timeout=10)
        body = self._record("Sign content", resp, 200)
        signed_token = body.get("signed_token")
        if not signed_token:
            return self.report

        resp = self.session.post(self._url("/api/posts"), json=post_data, headers=self._auth(signed_token), timeout=10)
        body = self._record("POST with signed token", resp, 201)
        post_id = body.get("post", {}).get("id")

        tampered = dict(post_data, content="Tampered content!")
        resp = self.session.post(self._url("/api/posts"), json=tampered, headers=self._auth(signed_token), timeout=10)
        self._record("POST tampered body", resp, 400)

        if post_id is None:
            return self.report

        resp = self.session.get(self._url(f"/api/posts/{post_id}"), timeout=10)
        self._record("Fetch created post", resp, 200)

        resp = self.session.delete(self._url(f"/api/posts/{post_id}"), headers=self._auth(token), timeout=10)
        self._record("Delete created post", resp, 200)

        return self.report


def main():
    parser = argparse.ArgumentParser(description="Secure RESTful API walkthrough")
    parser.add_argument("--target", default="http://localhost:3000", help="API base URL")
    parser.add_argument("--username", default="admin", help="Account to log in with")
    parser.add_argument("--password", default="password123", help="Account password")
    parser.add_argument("--verbose", "-v", action="store_true", help="Verbose output")
    args = parser.parse_args()

    demo = APIDemo(args.target, args.username, args.password, verbose=args.verbose)
    try:
        report = demo.run()
    except requests.ConnectionError:
        print(f"Cannot reach {args.target}. Start the server with: python -m webapi.api_server")
        sys.exit(2)

    passed = sum(1 for r in report.results if r.passed)
    print(f"\n{passed}/{len(report.results)} steps behaved as expected")
    sys.exit(0 if report.all_passed else 1)


if __name__ == "__main__":
    main()
