"""Integration tests for the CLI using CliRunner."""

from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest
from click.testing import CliRunner

from gsva_workshop.cli.main import cli
from gsva_workshop.gmt import import_gmt


@pytest.fixture
def runner() -> CliRunner:
    return CliRunner()


@pytest.fixture
def sample_gmt(tmp_path: Path) -> Path:
    path = tmp_path / "hallmark.gmt"
    path.write_text(
        "HALLMARK_P53\turl1\tTP53\tMDM2\tCDKN1A\n"
        "HALLMARK_MYC\turl2\tMYC\n"
        "HALLMARK_P53\turl3\tBAX\n"
    )
    return path


@pytest.fixture
def test_config(tmp_path: Path) -> Path:
    """Minimal config YAML for testing."""
    config_path = tmp_path / "test_config.yaml"
    config_path.write_text(f"""
output_dir: {tmp_path}/results
importer:
  dedup_policy: last
  gene_id_type: symbol
annotation:
  batch_size: 500
  min_success_rate: 0.5
""")
    return config_path


def test_cli_help(runner):
    result = runner.invoke(cli, ['--help'])

    assert result.exit_code == 0
    assert 'import' in result.output
    assert 'map' in result.output


def test_info_with_defaults(runner):
    result = runner.invoke(cli, ['info'])

    assert result.exit_code == 0
    assert 'gsva-workshop v' in result.output
    assert 'Dedup Policy: first' in result.output


def test_info_with_config(runner, test_config):
    result = runner.invoke(cli, ['--config', str(test_config), 'info'])

    assert result.exit_code == 0
    assert 'Dedup Policy: last' in result.output
    assert 'Batch Size:       500' in result.output


def test_import_summary(runner, sample_gmt):
    result = runner.invoke(cli, ['import', str(sample_gmt)])

    assert result.exit_code == 0, result.output
    assert 'Imported 2 gene sets' in result.output
    assert '4 distinct genes' in result.output


def test_import_error_policy_fails(runner, sample_gmt):
    result = runner.invoke(cli, ['import', str(sample_gmt), '--dedup', 'error'])

    assert result.exit_code == 1
    assert 'HALLMARK_P53' in result.output


def test_import_missing_source_fails(runner, tmp_path):
    result = runner.invoke(cli, ['import', str(tmp_path / 'absent.gmt')])

    assert result.exit_code == 1
    assert 'Import failed' in result.output


def test_import_writes_outputs(runner, sample_gmt, tmp_path, test_config):
    gmt_out = tmp_path / 'out' / 'dedup.gmt'
    table_dir = tmp_path / 'tables'

    result = runner.invoke(cli, [
        '--config', str(test_config),
        'import', str(sample_gmt),
        '--gmt-out', str(gmt_out),
        '--table-dir', str(table_dir),
    ])

    assert result.exit_code == 0, result.output
    assert (table_dir / 'gene_sets.tsv').exists()
    assert (table_dir / 'gene_sets.parquet').exists()

    # Config selects the last occurrence
    written = import_gmt(gmt_out, output_form='mapping')
    assert written == {'HALLMARK_P53': ['BAX'], 'HALLMARK_MYC': ['MYC']}


def test_map_command(runner, sample_gmt, tmp_path):
    gmt_out = tmp_path / 'entrez.gmt'

    with patch('mygene.MyGeneInfo') as mock_mygene:
        mock_mg = MagicMock()
        mock_mg.querymany.return_value = {'out': [
            {'query': 'TP53', 'entrezgene': '7157'},
            {'query': 'MDM2', 'entrezgene': '4193'},
            {'query': 'CDKN1A', 'entrezgene': '1026'},
            {'query': 'MYC', 'entrezgene': '4609'},
        ]}
        mock_mygene.return_value = mock_mg

        result = runner.invoke(cli, [
            'map', str(sample_gmt),
            '--from', 'symbol', '--to', 'entrezgene',
            '--gmt-out', str(gmt_out),
        ])

    assert result.exit_code == 0, result.output
    assert 'PASSED' in result.output
    assert import_gmt(gmt_out, output_form='mapping') == {
        'HALLMARK_P53': ['7157', '4193', '1026'],
        'HALLMARK_MYC': ['4609'],
    }


def test_map_command_fails_validation(runner, sample_gmt, tmp_path):
    gmt_out = tmp_path / 'entrez.gmt'

    with patch('mygene.MyGeneInfo') as mock_mygene:
        mock_mg = MagicMock()
        mock_mg.querymany.return_value = {'out': [
            {'query': 'TP53', 'entrezgene': '7157'},
        ]}
        mock_mygene.return_value = mock_mg

        result = runner.invoke(cli, [
            'map', str(sample_gmt),
            '--from', 'symbol', '--to', 'entrezgene',
            '--gmt-out', str(gmt_out),
        ])

    assert result.exit_code == 1
    assert 'FAILED' in result.output
    assert not gmt_out.exists()


def test_map_command_requires_source_type(runner, sample_gmt, tmp_path):
    result = runner.invoke(cli, [
        'map', str(sample_gmt), '--to', 'entrezgene',
        '--gmt-out', str(tmp_path / 'x.gmt'),
    ])

    assert result.exit_code == 1
    assert 'Source identifier type unknown' in result.output
