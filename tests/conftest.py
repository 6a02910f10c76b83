"""Shared test fixtures for goscope."""

from pathlib import Path

import pytest


def write_go(root: Path, rel: str, source: str) -> Path:
    path = root / rel
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(source, encoding="utf-8")
    return path


@pytest.fixture
def go_project(tmp_path: Path) -> Path:
    """A small Go module: a root package plus ``types`` and ``store`` modules."""
    (tmp_path / "go.mod").write_text("module example.com/demo\n\ngo 1.21\n")
    write_go(tmp_path, "client.go", CLIENT_GO)
    write_go(tmp_path, "types/message.go", TYPES_MESSAGE_GO)
    write_go(tmp_path, "store/store.go", STORE_GO)
    write_go(tmp_path, "client_test.go", "package demo\n\nfunc TestClient(t *testing.T) {}\n")
    write_go(tmp_path, "vendor/lib/lib.go", "package lib\n\nfunc Vendored() {}\n")
    write_go(tmp_path, ".hidden/secret.go", "package hidden\n\nfunc Hidden() {}\n")
    return tmp_path


CLIENT_GO = """\
package demo

import (
\t"context"
\tlog "example.com/demo/util/log"
\t"example.com/demo/types"
)

// Client talks to the server.
type Client struct {
\tStore   *store.Device // device store
\tLog     log.Logger
\tversion int
}

// NewClient creates a Client.
func NewClient(store *store.Device) *Client {
\treturn &Client{Store: store}
}

// SendMessage sends a message to a chat.
func (cli *Client) SendMessage(ctx context.Context, to types.JID,
\tmsg *types.Message) error {
\treturn nil
}

func (cli *Client) internal() {}

const DefaultTimeout = 30
"""

TYPES_MESSAGE_GO = """\
package types

import "strings"

// JID is a chat identifier.
type JID = string

type Message struct {
\tID   string
\tText string
}

type MessageHandler interface {
\tHandleMessage(msg *Message) error
}
"""

STORE_GO = """\
package store

import (
\t"database/sql"
\t"example.com/demo/types"
)

// DeviceContainer stores devices.
type DeviceContainer interface {
\tGetDevice(jid types.JID) (*Device, error)
\tPutDevice(device *Device) error
}

type Device struct {
\tID types.JID
}

var (
\tErrNotFound = errors.New("not found")
\terrInternal = errors.New("internal")
)
"""
