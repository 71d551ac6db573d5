# invaders

A small arcade shooter in the spirit of Space Invaders. Ten invaders, in two
rows of five, march from side to side across a 640×480 field and step down
each time one of them passes an edge. You move a ship along the bottom and
shoot them down; every invader you hit makes the rest march faster.
Depending on the stage you play, the invaders drop bombs, hits on your ship
are detected, and a game-over screen ends the round.

## Installation

```
pip install .
```

To run the tests as well:

```
pip install .[test]
pytest
```

## Playing

```
invaders
```

Options:

- `--stage N`: which rules to play with, 15 to 18 (default 18)
- `--sprites DIR`: directory holding the sprite images (default `sprites`)
- `--seed N`: seed for the random numbers that decide when invaders fire

Controls:

- **Left / Right arrows**: move the ship
- **Space**: fire. Up to three of your shots can be in the air at once, and
  you have to release the key before the next shot.
- **R**: start over once the game-over screen is showing

The window runs at 50 frames a second. Closing it ends the program.

## Stages

Each stage adds one feature to the one before it (`invaders.game.Stage`):

- `15` (`Stage.SHOOT_ENEMIES`): invaders march and can be shot down.
- `16` (`Stage.ENEMIES_SHOOT_BACK`): invaders drop bombs at random.
- `17` (`Stage.PLAYER_HIT_DETECT`): a bomb or an invader touching your ship
  counts as a hit; each hit is logged as "player hit detected!!".
- `18` (`Stage.GAMEOVER_SCREEN`): a hit freezes the game and shows the
  game-over screen until you press R.

## Using the game model

The rules live in `invaders.game.Game` and run without a display, which is
handy for tests or for trying out the rules:

```python
import random
from invaders.game import Game, Key, Stage

game = Game(Stage.GAMEOVER_SCREEN, random.Random(1))
game.key_down(Key.SPACE)
game.key_up(Key.SPACE)
for _ in range(100):
    game.tick()
print(game.game_over(), game.hits)
```

Each `Game.tick()` advances one frame. `Game.key_down` and `Game.key_up`
take a `Key` (`LEFT`, `RIGHT`, `SPACE`, `R`), `Game.reset()` starts over, and
`Game.hits` counts the hits on the ship. The ship, bullet slots and marching
formation are `Player`, `BulletPool` and `Formation` in `invaders.entities`.

Other helpers:

- `invaders.linalg`: `Mat4` (column-major, multiplied with `a @ b`),
  `identity`, `translation`, `orthographic`, `subtract`, `cross`,
  `normalize` and `format_vec2`.
- `invaders.assets`: `load_texture` reads an RGB or RGBA PNG into a
  `Texture`, `load_shader_source` reads a text file; both raise `AssetError`
  on failure.
- `invaders.app`: `Renderer` draws a game onto a pygame surface; `main` is
  the `invaders` command.

## Sprites

The game reads `background.png`, `player.png`, `bullet.png` and `enemy.png`
from the sprite directory at start-up, and `enemy_bullet.png` and
`gameover.png` when they are first drawn. Only RGB and RGBA PNG images are
accepted; a missing or unsupported image stops the game with an error
message. No sprite images come with the package.

## What it does not do

There is no score display, no lives, no sound and no further levels: once
all ten invaders are shot down the field simply stays empty.