"""
Shared fixtures: build CloudFront log lines và gzip log directories.
"""

import gzip
import os
import sys

import pytest

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))


def build_line(
    date='2024-01-01',
    ip='192.0.2.10',
    method='GET',
    path='/cockroach-v23.1.0.linux-amd64.tgz',
    status='200',
    num_fields=24
):
    """Một dòng log CloudFront tab-separated với num_fields cột."""
    fields = [
        date, '12:00:00', 'IAD89-C1', '1024', ip, method,
        'd111111abcdef8.cloudfront.net', path, status, '-',
        'curl/8.0', '-', '-', 'Miss', 'req-id', 'binaries.example.com',
        'https', '120', '0.5', '-', 'TLSv1.3', 'TLS_AES_128_GCM_SHA256',
        'Miss', 'HTTP/2.0',
    ]
    while len(fields) < num_fields:
        fields.append('-')
    return '\t'.join(fields[:num_fields]) + '\n'


HEADER_LINES = [
    '#Version: 1.0\n',
    '#Fields: date time x-edge-location sc-bytes c-ip cs-method ...\n',
]


def write_gz(path, lines):
    with gzip.open(path, 'wt', encoding='utf-8') as f:
        f.writelines(lines)
    return path


@pytest.fixture
def make_line():
    return build_line


@pytest.fixture
def log_dir(tmp_path):
    """
    Thư mục log mẫu:
        - a.gz: 2024-01-01 (Mon) 2 linux, 1 darwin; 1 dòng 206
        - b.gz: 2024-01-07 (Sun) 1 windows zip; 1 dòng malformed
        - corrupt.gz: không phải gzip
        - notes.txt: bị bỏ qua
    """
    directory = tmp_path / 'logs'
    directory.mkdir()
    write_gz(directory / 'a.gz', HEADER_LINES + [
        build_line('2024-01-01'),
        build_line('2024-01-01', path='/cockroach-v23.1.0.linux-arm64.tgz'),
        build_line('2024-01-01', path='/cockroach-v23.1.0.darwin-10.9-amd64.tgz'),
        build_line('2024-01-01', status='206'),
    ])
    write_gz(directory / 'b.gz', HEADER_LINES + [
        build_line('2024-01-07', path='/cockroach-v23.1.0.windows-6.2-amd64.zip'),
        'too\tfew\tfields\n',
    ])
    (directory / 'corrupt.gz').write_bytes(b'this is not gzip data')
    (directory / 'notes.txt').write_text('ignored')
    return directory
