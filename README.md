# deskmates

Core logic for a desktop mascot ("shimeji") manager, and a command-line
client that controls a running manager through its local HTTP API at
`http://127.0.0.1:32456`.

The package has no dependencies outside the standard library.

## Installing

```
pip install .
```

For running the tests:

```
pip install .[test]
pytest
```

## Command line

```
deskmates [--quiet] <command> [options...]
```

Commands:

- `list [--json] [--selector CODE]`: show the spawned mascots, each with its
  id, name, data id, active behaviour and anchor.
- `list-loaded [--json] [--sort-by-id]`: show the loaded mascot templates as
  `[id] name`. `--json` and `--sort-by-id` cannot be combined.
- `spawn (--name NAME | --data-id ID) [--behavior B ...] [--x X --y Y] [--json]`:
  spawn a mascot. Exactly one of `--name` and `--data-id` must be given. If
  `--behavior` is given more than once, one of them is picked at random.
  `--x` and `--y` must be given together.
- `alter --id ID [--selector CODE ...] [--behavior B ...] [--x X --y Y] [--json]`:
  change a spawned mascot's behaviour or position.
- `dismiss --id ID [--selector CODE]`: remove one mascot.
- `dismiss-all [--selector CODE]`: remove every mascot, or those the selector
  matches.

`--id` is either a non-negative number or one of `oldest`, `newest` or
`random`. The latter are looked up in the list of spawned mascots, filtered
by each selector in turn until one gives an id; a numeric id cannot be
combined with a selector.

`--json` prints the server's response body as it is. `--quiet`, given before
the command, suppresses all output. On a malformed or unknown option the
command's usage is printed. The exit status is 0 on success and 1 on failure;
when the manager cannot be reached, the client reports that the request
failed and exits with 1.

## Library

- `deskmates.environment`: `Environment` (screen, floor, work area, ceiling,
  active window, cursor, scale), the shapes `Rect`, `Area`, `DArea`,
  `Border`, `DVec`, the foreground-window record `WindowInfo`, and
  `update_environment`, which refreshes an environment from a screen's full
  and available geometry, the cursor and the foreground window.
- `deskmates.roster`: `MascotRoster`, the live mascots in spawn order with
  `kill_all`, `kill_all_but_one`, `kill_all_but_one_named`, `enforce_limit`,
  `count_by_name`, `can_spawn` and `hit_test`; plus `normalize_breed_name`,
  `delete_prompt_message` and `import_summary`.
- `deskmates.placement`: `place_window` returns a `Placement` (window position
  and size, anchor in the window, draw origin and scale) that keeps the
  window on screen; `is_mirrored` and `point_inside` for drawing and hit
  testing.
- `deskmates.inspector`: text for inspector rows (`double_to_string`,
  `vec_to_string`, `dvec_to_string`, `area_to_string`, `darea_to_string`,
  `active_ie_to_string`).
- `deskmates.settings`: `ManagerSettings` with `load_settings` and
  `save_settings` (JSON files), colour and scale helpers
  (`color_to_string`, `parse_color`, `scale_text`, `custom_scale_text`,
  `slider_to_scale`, `scale_to_slider`, `preset_checked`), and mascot folder
  helpers (`prepare_mascots_dir`, `mascot_names_in`).
- `deskmates.sounds`: `SoundEffectManager`, which finds sound files in its
  search paths and plays one at a time through a backend you supply.
- `deskmates.args`: the option parser the command line uses (`Argument`,
  `ArgType`, `ArgumentList`, `UsageError`).
- `deskmates.cli`: `ApiClient`, `parse_api_result`, `resolve_mascot_id`,
  `run_cli` and `main`.

## What this package does not do

- It has no desktop application: no windows, drawing, menus or dialogs, and
  no mascot behaviour engine that animates mascots from their action and
  behaviour definitions.
- It does not serve the HTTP API; the command line only works against a
  manager that is already running and serving it.
- It does not import mascot archives or load mascot images.
- It has no audio output of its own: without a backend,
  `SoundEffectManager.play` does nothing.
- Settings are kept only in the JSON file you pass to `load_settings` and
  `save_settings`; there is no default location.