"""
Maps Package - Procedural Terrain Generation

This package turns a random stream into the tile map the game is played on.
The map is generated once, before anything else runs, and is read-only from
then on.

MODULES:
--------
config.py
    GenerationParameters dataclass with every tunable and its validation.

utils.py
    Grid helpers: bounds-safe reads/writes, neighbor counting, upscaling,
    histograms.

terrainGen.py
    TerrainGenerator orchestrating the pipeline, plus each stage as a
    standalone function.

tileMap.py
    TileMap, the read-only query surface handed to the rest of the game.

terrain.py
    Tile codes and terrain type definitions.

USAGE:
------
```python
from simple_rts.game.data.maps import GenerationParameters, TerrainGenerator

params = GenerationParameters(seed=12345)
tile_map = TerrainGenerator(params).generate()

tile_map.width(), tile_map.height()
tile_map.tile_at(10, 20)      # 0..3, or INVALID_TILE off the map
tile_map.spawn_point()        # where the camera and first base start
```

PIPELINE:
---------
1. **Region grid**: bounded-random coarse grid, all void
2. **Landmass carve**: noisy wedge of rays cast from near the middle
3. **Islands**: random single elevated cells
4. **Erosion**: elevated cells spread (value - 1) into 4-connected void
5. **Upscale**: each region cell becomes a K x K block of tiles
6. **Roughening**: stochastic downgrades/upgrades per tile
7. **Smoothing**: 8-neighbor automaton, thin areas erode, dense ones merge

Tile codes: 0 void, 1 open, 2 rough, 3 obstacle.
"""

from simple_rts.game.data.maps.config import GenerationParameters, MapConfigError
from simple_rts.game.data.maps.terrainGen import TerrainGenerator, TerrainGenerationError
from simple_rts.game.data.maps.tileMap import TileMap
from simple_rts.game.data.maps.terrain import (
    terrain, void, plains, rough, rocks, ALL_TERRAIN_TYPES,
    VOID, OPEN, ROUGH, OBSTACLE, INVALID_TILE, TILE_CODES
)

__all__ = [
    # Configuration
    'GenerationParameters',
    'MapConfigError',

    # Generator
    'TerrainGenerator',
    'TerrainGenerationError',
    'TileMap',

    # Terrain
    'terrain',
    'void',
    'plains',
    'rough',
    'rocks',
    'ALL_TERRAIN_TYPES',
    'VOID',
    'OPEN',
    'ROUGH',
    'OBSTACLE',
    'INVALID_TILE',
    'TILE_CODES',
]
