"""CLI entrypoints for rendering watch face frames and running the frame loop."""

from __future__ import annotations

import argparse
import json
from dataclasses import asdict
from datetime import datetime
from pathlib import Path

from watchface_core import (
    FrameLoop,
    PerformanceController,
    PerformanceTargets,
    WatchFaceRepository,
    load_config,
    save_config,
)
from watchface_core.config import AppConfig, config_path
from watchface_core.logging_setup import configure_logging
from watchface_renderer import (
    AnalogWatchRenderer,
    DrawMode,
    Layer,
    LayerMode,
    PillowCanvas,
    RenderParameters,
    default_complications,
    list_color_styles,
)


def _print_json(data: object) -> None:
    print(json.dumps(data, indent=2, sort_keys=True, default=str))


def _parse_time(value: str | None) -> datetime:
    now = datetime.now()
    if not value:
        return now
    parsed = datetime.strptime(value, "%H:%M:%S")
    return now.replace(hour=parsed.hour, minute=parsed.minute, second=parsed.second, microsecond=0)


def _render_parameters(args: argparse.Namespace, cfg: AppConfig) -> RenderParameters:
    ambient = bool(getattr(args, "ambient", False) or cfg.render.ambient)
    hide_top = bool(getattr(args, "hide_top", False) or cfg.render.hide_top_layer)
    hide_base = bool(getattr(args, "hide_base", False) or cfg.render.hide_base_layer)
    return RenderParameters(
        draw_mode=DrawMode.AMBIENT if ambient else DrawMode.INTERACTIVE,
        layer_parameters={
            Layer.TOP: LayerMode.HIDE if hide_top else LayerMode.DRAW,
            Layer.BASE: LayerMode.HIDE if hide_base else LayerMode.DRAW,
        },
    )


def _build(cfg: AppConfig, style_override: str | None = None) -> tuple[WatchFaceRepository, AnalogWatchRenderer, PillowCanvas]:
    repository = WatchFaceRepository()
    renderer = AnalogWatchRenderer(
        repository,
        complications=default_complications(),
        hand_stroke_width=cfg.render.hand_stroke_width,
        hour_mark_text_size=cfg.render.hour_mark_text_size,
    )
    repository.load(cfg.style)
    if style_override:
        repository.update_user_style(color_style=style_override)
    canvas = PillowCanvas(cfg.display.width, cfg.display.height)
    return repository, renderer, canvas


def cmd_render(args: argparse.Namespace) -> int:
    try:
        when = _parse_time(args.time)
    except ValueError as exc:
        _print_json({"success": False, "error": f"invalid --time {args.time!r}: {exc}"})
        return 2

    cfg = load_config(Path(args.config) if args.config else None)
    if args.size:
        cfg.display.width = cfg.display.height = args.size
    _repository, renderer, canvas = _build(cfg, args.style)

    with renderer:
        renderer.render(canvas, canvas.bounds, when, _render_parameters(args, cfg))

    out = Path(args.out).expanduser().resolve()
    out.parent.mkdir(parents=True, exist_ok=True)
    canvas.to_image().save(out, format="PNG")
    _print_json({"success": True, "out": str(out), "width": canvas.width, "height": canvas.height})
    return 0


def cmd_run(args: argparse.Namespace) -> int:
    cfg = load_config(Path(args.config) if args.config else None)
    _repository, renderer, canvas = _build(cfg, args.style)
    perf = PerformanceController(
        PerformanceTargets(
            cpu_percent_max=cfg.performance.cpu_percent_max,
            rss_mb_max=cfg.performance.rss_mb_max,
            fps_min=cfg.performance.fps_min,
            fps_max=cfg.performance.fps_max,
        )
    )
    loop = FrameLoop(
        renderer,
        canvas,
        render_parameters=_render_parameters(args, cfg),
        interactive_frame_ms=cfg.display.interactive_frame_ms,
        ambient_frame_ms=cfg.display.ambient_frame_ms,
        performance=perf,
    )

    out_dir = Path(args.out_dir).expanduser().resolve() if args.out_dir else None
    saved: list[str] = []

    def _save_frame(frame: PillowCanvas) -> None:
        if out_dir is None or loop.status.frames % max(1, args.save_every) != 0:
            return
        out_dir.mkdir(parents=True, exist_ok=True)
        path = out_dir / f"frame_{loop.status.frames:05d}.png"
        path.write_bytes(frame.to_png_bytes())
        saved.append(str(path))

    with renderer:
        status = loop.run(args.seconds, on_frame=_save_frame)

    cpu_max = max((s.cpu_percent for s in status.samples), default=0.0)
    rss_max = max((s.rss_mb for s in status.samples), default=0.0)
    _print_json(
        {
            "seconds": args.seconds,
            "frames": status.frames,
            "fps": status.fps,
            "frame_ms": status.frame_ms,
            "max_render_ms": status.max_render_ms,
            "geometry_recomputations": renderer.geometry_recomputations,
            "saved_frames": saved,
            "budget": {
                "max_observed": {"cpu_percent": cpu_max, "rss_mb": rss_max},
                "last": asdict(status.budget) if status.budget else None,
            },
        }
    )
    return 0


def cmd_styles(_args: argparse.Namespace) -> int:
    _print_json(list_color_styles())
    return 0


def cmd_config_init(args: argparse.Namespace) -> int:
    path = Path(args.path).expanduser() if args.path else config_path()
    if path.exists() and not args.force:
        _print_json({"success": False, "error": "config exists", "path": str(path)})
        return 2
    written = save_config(AppConfig(), path)
    _print_json({"success": True, "path": str(written)})
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="watchface", description="Analog watch face renderer and tools")
    sub = parser.add_subparsers(dest="command", required=True)

    render_cmd = sub.add_parser("render", help="Render a single frame to PNG")
    render_cmd.add_argument("--out", default="watchface.png", help="Output PNG path")
    render_cmd.add_argument("--time", default=None, help="Wall-clock time as HH:MM:SS (default: now)")
    render_cmd.add_argument("--style", default=None, choices=list_color_styles())
    render_cmd.add_argument("--size", type=int, default=None, help="Square face size in pixels")
    render_cmd.add_argument("--ambient", action="store_true", help="Render in ambient mode")
    render_cmd.add_argument("--hide-top", action="store_true", help="Hide the clock hand layer")
    render_cmd.add_argument("--hide-base", action="store_true", help="Hide the hour pip layer")
    render_cmd.add_argument("--config", default=None, help="Optional config file path")
    render_cmd.set_defaults(func=cmd_render)

    run_cmd = sub.add_parser("run", help="Run the frame loop headless and report the render budget")
    run_cmd.add_argument("--seconds", type=float, default=10.0)
    run_cmd.add_argument("--style", default=None, choices=list_color_styles())
    run_cmd.add_argument("--ambient", action="store_true")
    run_cmd.add_argument("--out-dir", default=None, help="Optional directory for saved frames")
    run_cmd.add_argument("--save-every", type=int, default=60, help="Save every Nth frame when --out-dir is set")
    run_cmd.add_argument("--config", default=None, help="Optional config file path")
    run_cmd.set_defaults(func=cmd_run)

    styles_cmd = sub.add_parser("styles", help="List color styles")
    styles_cmd.set_defaults(func=cmd_styles)

    config_cmd = sub.add_parser("config", help="Configuration helpers")
    config_sub = config_cmd.add_subparsers(dest="config_cmd", required=True)
    init_cmd = config_sub.add_parser("init", help="Write a default config file")
    init_cmd.add_argument("--path", default=None)
    init_cmd.add_argument("--force", action="store_true")
    init_cmd.set_defaults(func=cmd_config_init)

    return parser


def main(argv: list[str] | None = None) -> int:
    cfg = load_config()
    configure_logging(keep_files=cfg.diagnostics.keep_log_files, console=False)
    parser = build_parser()
    args = parser.parse_args(argv)
    return int(args.func(args))


if __name__ == "__main__":
    raise SystemExit(main())
