import logging
import argparse
from rich import print
from .config import EngineConfig, load_config
from .engine import TrackingEngine
from .pipeline import TrackingPipeline
from .api import create_app, run_api

def parse_args(argv=None):
    p = argparse.ArgumentParser(description='ROI tracking engine demo')
    p.add_argument('--config', type=str, default='configs/default.yaml')
    p.add_argument('--max-ticks', type=int, default=None)
    p.add_argument('--log-level', type=str, default='INFO')
    p.add_argument('--serve', action='store_true', help='serve the REST API instead of running the demo pipeline')
    p.add_argument('--host', type=str, default='0.0.0.0')
    p.add_argument('--port', type=int, default=8000)
    return p.parse_args(argv)

def serve(cfg, host, port):
    engine = TrackingEngine(EngineConfig.from_dict(cfg['engine']), roi=cfg.get('roi') or [])
    print(f'[bold green]Serving ROI Tracking API on {host}:{port}[/bold green]')
    run_api(host=host, port=port, api_app=create_app(engine))

def main(argv=None):
    args = parse_args(argv)
    logging.basicConfig(level=args.log_level.upper(), format="%(asctime)s %(name)s %(message)s")
    cfg = load_config(args.config)
    if args.serve:
        serve(cfg, args.host, args.port)
        return
    if args.max_ticks is not None:
        cfg['runtime']['max_ticks'] = args.max_ticks
    print('[bold green]Launching ROI Tracking Pipeline[/bold green]')
    pipe = TrackingPipeline(cfg)
    result = pipe.run()
    if result is not None:
        print(f'Active tracks: [cyan]{len(result.tracks)}[/cyan]  '
              f'Entered: [blue]{result.entered}[/blue]  Exited: [red]{result.exited}[/red]')
    if pipe.detector_failures or pipe.rejected_ticks:
        print(f'[yellow]Detector failures: {pipe.detector_failures}, rejected ticks: {pipe.rejected_ticks}[/yellow]')
    print('[bold green]Done.[/bold green]')

if __name__ == '__main__':
    main()
