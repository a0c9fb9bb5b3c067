# File: tests/conftest.py

import pytest
import os
import sys
import logging
import sqlalchemy
from pathlib import Path
from sqlalchemy import create_engine, text
from sqlalchemy.orm import sessionmaker
from sqlalchemy_utils import database_exists, create_database

# 1. Add project root to path
sys.path.append(os.getcwd())

# 2. Point the engine at a throwaway database before anything imports it
os.environ.setdefault("REFFINDER_DATABASE_URL", "sqlite:///./test_reffinder.db")

from reffinder.core.config.settings import settings

# 3. Create Test Engine
TEST_ENGINE = create_engine(settings.DATABASE_URL)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=TEST_ENGINE)

# --- SAMPLE PROJECT ---

TEXTURE_GUID = "a1" * 16
MATERIAL_GUID = "b2" * 16
PREFAB_B_GUID = "c3" * 16
PREFAB_C_GUID = "d4" * 16
SCENE_GUID = "e5" * 16
BUILTIN_EXTRA_GUID = "0000000000000000f000000000000000"

MATERIAL_TEXT = f"""%YAML 1.1
%TAG !u! tag:unity3d.com,2011:
--- !u!21 &2100000
Material:
  m_Name: A
  m_Shader: {{fileID: 46, guid: {BUILTIN_EXTRA_GUID}, type: 0}}
  m_SavedProperties:
    m_TexEnvs:
    - _MainTex:
        m_Texture: {{fileID: 2800000, guid: {TEXTURE_GUID}, type: 3}}
"""

PREFAB_B_TEXT = f"""%YAML 1.1
%TAG !u! tag:unity3d.com,2011:
--- !u!23 &2300000
MeshRenderer:
  m_Materials:
  - {{fileID: 2100000, guid: {MATERIAL_GUID}, type: 2}}
--- !u!23 &2300002
MeshRenderer:
  m_Materials:
  - {{fileID: 2100000, guid: {MATERIAL_GUID}, type: 2}}
"""

PREFAB_C_TEXT = """%YAML 1.1
%TAG !u! tag:unity3d.com,2011:
--- !u!1 &100000
GameObject:
  m_Name: C
"""

SCENE_TEXT = f"""%YAML 1.1
%TAG !u! tag:unity3d.com,2011:
--- !u!1001 &500000
PrefabInstance:
  m_SourcePrefab: {{fileID: 100100000, guid: {PREFAB_B_GUID}, type: 3}}
"""


def write_asset(project_root: Path, relative_path: str, guid: str, content=None):
    """
    Writes an asset plus its .meta sidecar.
    `content` may be text or bytes.
    """
    asset_path = project_root / relative_path
    asset_path.parent.mkdir(parents=True, exist_ok=True)
    if isinstance(content, bytes):
        asset_path.write_bytes(content)
    else:
        asset_path.write_text(content or "", encoding="utf-8")

    meta_path = asset_path.with_name(asset_path.name + ".meta")
    meta_path.write_text(f"fileFormatVersion: 2\nguid: {guid}\n", encoding="utf-8")
    return asset_path


def silence_sqlalchemy():
    """Keeps engine INFO logs out of the test output."""
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)


@pytest.fixture(scope="session", autouse=True)
def global_setup():
    """
    Runs once per test session.
    Ensures DB exists and silences logs.
    """
    silence_sqlalchemy()

    if not database_exists(TEST_ENGINE.url):
        create_database(TEST_ENGINE.url)

    # Import all models to ensure they are registered
    from reffinder.core.database.base import Base
    import reffinder.features.asset_index.data.sql_models

    # Create tables once
    Base.metadata.create_all(bind=TEST_ENGINE)

    yield


@pytest.fixture(scope="function", autouse=True)
def clean_db(global_setup):
    """
    Runs before EVERY test.
    Detects DB type and cleans tables appropriately.
    """
    from reffinder.core.database.base import Base

    # 1. Safety Check: Ensure tables exist
    Base.metadata.create_all(bind=TEST_ENGINE)

    # 2. Clean Data
    with TEST_ENGINE.connect() as conn:
        trans = conn.begin()

        is_sqlite = "sqlite" in str(TEST_ENGINE.url)

        inspector = sqlalchemy.inspect(TEST_ENGINE)
        table_names = inspector.get_table_names()

        if table_names:
            if is_sqlite:
                conn.execute(text("PRAGMA foreign_keys = OFF;"))
                for table in table_names:
                    conn.execute(text(f'DELETE FROM "{table}";'))
                conn.execute(text("PRAGMA foreign_keys = ON;"))
            else:
                for table in table_names:
                    conn.execute(text(f'TRUNCATE TABLE "{table}" CASCADE;'))

        trans.commit()

    yield


@pytest.fixture(scope="function")
def db_session():
    """
    Provides a session for the test to use.
    """
    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def sample_project(tmp_path):
    """
    Creates a small project:
    - Textures/Wood.png        (binary, not a scan candidate)
    - Materials/A.mat          -> Wood.png, builtin shader
    - Prefabs/B.prefab         -> A.mat (twice)
    - Prefabs/C.prefab         -> nothing
    - Scenes/Main.unity        -> B.prefab (so A.mat transitively)
    - junk that the catalog must skip
    """
    root = tmp_path / "Game"

    write_asset(root, "Assets/Textures/Wood.png", TEXTURE_GUID, b"\x89PNG\r\n\x1a\n\x00\xff\xfe")
    write_asset(root, "Assets/Materials/A.mat", MATERIAL_GUID, MATERIAL_TEXT)
    write_asset(root, "Assets/Prefabs/B.prefab", PREFAB_B_GUID, PREFAB_B_TEXT)
    write_asset(root, "Assets/Prefabs/C.prefab", PREFAB_C_GUID, PREFAB_C_TEXT)
    write_asset(root, "Assets/Scenes/Main.unity", SCENE_GUID, SCENE_TEXT)

    # Junk: unknown extension, hidden folder, "~" folder
    (root / "Assets" / "Readme.txt").write_text("not an asset")
    write_asset(root, "Assets/.hidden/Ghost.mat", "99" * 16, MATERIAL_TEXT)
    write_asset(root, "Assets/Samples~/Sample.prefab", "88" * 16, PREFAB_B_TEXT)

    settings_dir = root / "ProjectSettings"
    settings_dir.mkdir(parents=True)
    (settings_dir / "EditorSettings.asset").write_text(
        "%YAML 1.1\n--- !u!159 &1\nEditorSettings:\n  m_SerializationMode: 2\n"
    )

    return root
