"""
Web application for drivetrain kinematics

Interactive dashboard to inspect the module states a robot config produces
for a commanded chassis speed.
"""

import logging
from typing import Any, Dict, List, Sequence

import dash
from dash import dcc, html, Input, Output, State
from dash.exceptions import PreventUpdate
import numpy as np
import plotly.graph_objs as go

from drivebase import (
    ChassisSpeeds,
    DrivebaseError,
    MotorType,
    ModuleConfig,
    RobotConfig,
    SwerveModuleState,
    load_settings,
)

logging.basicConfig(level=logging.INFO, format="%(asctime)s [%(levelname)s] %(message)s", datefmt="%H:%M:%S")
logger = logging.getLogger(__name__)

MODULE_NAMES = {
    4: ["Front Left", "Front Right", "Back Left", "Back Right"],
    2: ["Left", "Right"],
}


def default_config(is_holonomic: bool = True) -> RobotConfig:
    """Typical competition robot, used when no settings file is given"""
    gearbox = MotorType.KRAKEN_X60.create(1 if is_holonomic else 2).with_reduction(6.75)
    module_config = ModuleConfig(
        wheel_radius_meters=0.048,
        max_drive_velocity_mps=5.45,
        wheel_cof=1.2,
        drive_motor=gearbox,
        drive_current_limit=60.0,
        num_motors=1 if is_holonomic else 2,
    )
    if is_holonomic:
        return RobotConfig.holonomic(74.088, 6.883, module_config, 0.546, 0.546)
    return RobotConfig.differential(74.088, 6.883, module_config, 0.546)


def module_names(config: RobotConfig) -> List[str]:
    return MODULE_NAMES.get(config.num_modules, [f"Module {i}" for i in range(config.num_modules)])


def create_module_figure(config: RobotConfig, states: Sequence[SwerveModuleState]) -> go.Figure:
    """
    Plot module locations with their velocity vectors

    Args:
        config: Robot config the states belong to
        states: One state per module, in module order

    Returns:
        Figure with one marker and one arrow per module
    """
    fig = go.Figure()
    names = module_names(config)
    max_speed = config.module_config.max_drive_velocity_mps
    # Arrow of a module at max speed spans the largest pivot distance
    scale = max(config.module_pivot_distance) / max_speed

    for name, location, state in zip(names, config.module_locations, states):
        dx = state.speed_mps * np.cos(state.angle) * scale
        dy = state.speed_mps * np.sin(state.angle) * scale
        color = "red" if abs(state.speed_mps) > max_speed else "#1f77b4"

        fig.add_trace(
            go.Scatter(
                x=[location.x, location.x + dx],
                y=[location.y, location.y + dy],
                mode="lines+markers",
                name=name,
                line=dict(color=color, width=3),
                marker=dict(size=[12, 4]),
                hovertemplate=(
                    f"{name}<br>Speed: {state.speed_mps:.2f} m/s<br>"
                    f"Angle: {np.degrees(state.angle):.1f}°<extra></extra>"
                ),
            )
        )

    fig.update_layout(
        title="Module States",
        xaxis_title="x (m, forward)",
        yaxis_title="y (m, left)",
        yaxis=dict(scaleanchor="x", scaleratio=1),
        height=500,
        template="plotly_white",
    )
    return fig


def create_results_layout(config: RobotConfig, states: Sequence[SwerveModuleState]) -> html.Div:
    """Create the results visualization layout"""
    table_rows = [html.Tr([html.Th("Module"), html.Th("Speed (m/s)"), html.Th("Angle (deg)")])]
    for name, state in zip(module_names(config), states):
        table_rows.append(
            html.Tr([
                html.Td(name),
                html.Td(f"{state.speed_mps:.3f}"),
                html.Td(f"{np.degrees(state.angle):.1f}"),
            ])
        )

    summary: Dict[str, Any] = {
        "Drivetrain": "Holonomic" if config.is_holonomic else "Differential",
        "Wheel friction force (N)": f"{config.wheel_friction_force:.2f}",
        "Max torque before slip (N*m)": f"{config.max_torque_friction:.2f}",
        "Torque loss at free speed (N*m)": f"{config.module_config.torque_loss:.3f}",
    }

    return html.Div([
        html.Div([dcc.Graph(figure=create_module_figure(config, states))], style={"marginBottom": "30px"}),
        html.Table(table_rows, style={"width": "100%", "marginBottom": "30px", "fontSize": "14px"}),
        html.Ul([html.Li(f"{key}: {value}") for key, value in summary.items()]),
    ])


def number_input(input_id: str, label: str, value: float) -> html.Div:
    return html.Div([
        html.Label(label, style={"fontWeight": "bold", "marginBottom": "5px"}),
        dcc.Input(id=input_id, type="number", value=value, step=0.1, style={"width": "100%", "padding": "8px"}),
    ], style={"width": "15%", "display": "inline-block", "marginRight": "20px"})


# Initialize Dash app
app = dash.Dash(__name__)
app.title = "Drivetrain Kinematics"

app.layout = html.Div([
    html.Div([
        html.H1("Drivetrain Kinematics", style={"textAlign": "center", "marginBottom": "30px"}),
        html.Div([
            html.Div([
                html.Label("Settings file (blank for default swerve):", style={"fontWeight": "bold", "marginBottom": "5px"}),
                dcc.Input(id="settings-input", type="text", value="", style={"width": "100%", "padding": "8px"}),
            ], style={"width": "30%", "display": "inline-block", "marginRight": "20px"}),
            number_input("vx-input", "vx (m/s):", 2.0),
            number_input("vy-input", "vy (m/s):", 0.0),
            number_input("omega-input", "omega (rad/s):", 1.0),
            html.Button("Compute", id="run-button", style={
                "width": "10%", "padding": "10px", "fontSize": "16px",
                "backgroundColor": "#4CAF50", "color": "white",
                "border": "none", "borderRadius": "5px", "cursor": "pointer",
            }),
        ], style={"marginBottom": "30px", "padding": "20px", "backgroundColor": "#f5f5f5", "borderRadius": "10px"}),
        html.Div(id="status-message", style={"marginBottom": "20px", "fontSize": "14px"}),
        html.Div(id="results-container"),
    ], style={"maxWidth": "1400px", "margin": "0 auto", "padding": "20px"})
])


@app.callback(
    [Output("results-container", "children"), Output("status-message", "children")],
    [Input("run-button", "n_clicks")],
    [State("settings-input", "value"), State("vx-input", "value"),
     State("vy-input", "value"), State("omega-input", "value")],
)
def update_results(
    n_clicks: int | None, settings_path: str, vx: float, vy: float, omega: float
) -> tuple[Any, Any]:
    """Compute module states for the requested chassis speeds"""
    if n_clicks is None:
        raise PreventUpdate

    try:
        if settings_path:
            config = load_settings(settings_path.strip()).to_robot_config()
        else:
            config = default_config()
        speeds = ChassisSpeeds(float(vx or 0.0), float(vy or 0.0), float(omega or 0.0))
        states = config.to_module_states(speeds)
    except (DrivebaseError, OSError) as e:
        logger.warning("Could not compute module states: %s", e)
        return [], html.Div(f"Error: {e}", style={"color": "red"})

    status_msg = html.Div(f"Computed {config.num_modules} module states.", style={"color": "green"})
    return create_results_layout(config, states), status_msg


if __name__ == "__main__":
    app.run(debug=True, port=8050)
