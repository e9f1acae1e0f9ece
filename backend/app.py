import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware

import config
from compliance import (
    NQF_RATIO_RULES,
    check_room_compliance,
    get_centre_compliance_summary,
    resolve_ratio_rule,
    suggest_optimal_staffing,
    validate_shift_action,
)
from compliance.types import AGE_GROUP_ALIASES
from fatigue import (
    create_projector,
    calculate_all_fatigue_scores,
    calculate_fatigue_score,
    detect_fatigue_violations,
)
from leave import (
    LSL_STATE_RULES,
    NES_ENTITLEMENTS,
    calculate_period_accruals,
    export_leave_balances,
    get_lsl_pro_rata_entitlement,
)
from schemas import (
    CentreSummaryRequest,
    FatigueScoreRequest,
    FatigueTeamRequest,
    LeaveExportRequest,
    LSLProRataRequest,
    PeriodAccrualRequest,
    RatioCheckRequest,
    StaffingSuggestRequest,
    ValidateActionRequest,
)
from utils.log import setup_logging


@asynccontextmanager
async def lifespan(app: FastAPI):
    config.validate_engine_config()
    setup_logging(config.LOG_LEVEL)
    logging.info("Compliance engine started")
    yield


app = FastAPI(title="rosterCompliance", lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# ============================================================================
# Ratio compliance
# ============================================================================


@app.get("/compliance/ratio/rules")
def get_ratio_rules():
    return {
        "rules": [r.to_dict() for r in NQF_RATIO_RULES],
        "aliases": AGE_GROUP_ALIASES,
    }


@app.post("/compliance/ratio/check")
def check_ratio(request: RatioCheckRequest):
    room = request.room.to_domain()
    ratio_rule = request.ratio_rule.to_domain() if request.ratio_rule else resolve_ratio_rule(room.age_group)

    status = check_room_compliance(
        room,
        ratio_rule,
        [s.to_domain() for s in request.shifts],
        [w.to_domain() for w in request.workers],
        request.date.isoformat(),
        request.booked_children,
        time_slot=request.time_slot or config.DEFAULT_TIME_SLOT,
        policy=request.policy.to_domain(),
        as_of=request.as_of,
    )
    return status.to_dict()


@app.post("/compliance/ratio/validate-action")
def validate_action(request: ValidateActionRequest):
    if request.shift.room_id != request.room.id:
        raise HTTPException(
            status_code=400,
            detail=f"Shift {request.shift.id} is not in room {request.room.id}",
        )

    result = validate_shift_action(
        request.action,
        request.shift.to_domain(),
        [s.to_domain() for s in request.all_shifts],
        [w.to_domain() for w in request.workers],
        request.room.to_domain(),
        request.booked_children,
        options=request.options(),
        ratio_rule=request.ratio_rule.to_domain() if request.ratio_rule else None,
        policy=request.policy.to_domain(),
        as_of=request.as_of,
    )
    return result.to_dict()


@app.post("/compliance/centre/summary")
def centre_summary(request: CentreSummaryRequest):
    centre = request.centre.to_domain()

    unknown_rooms = sorted(room_id for room_id in request.demand_by_room if centre.get_room(room_id) is None)
    if unknown_rooms:
        raise HTTPException(
            status_code=400,
            detail=f"Rooms not in centre {centre.id}: {', '.join(unknown_rooms)}",
        )

    summary = get_centre_compliance_summary(
        centre,
        [s.to_domain() for s in request.shifts],
        [w.to_domain() for w in request.workers],
        request.date.isoformat(),
        request.demand_by_room,
        policy=request.policy.to_domain(),
        as_of=request.as_of,
    )
    return summary.to_dict()


@app.post("/compliance/staffing/suggest")
def suggest_staffing(request: StaffingSuggestRequest):
    room = request.room.to_domain()
    ratio_rule = request.ratio_rule.to_domain() if request.ratio_rule else resolve_ratio_rule(room.age_group)

    recommendation = suggest_optimal_staffing(
        room,
        ratio_rule,
        request.booked_children,
        [w.to_domain() for w in request.available_workers],
        request.as_of,
        policy=request.policy.to_domain(),
    )
    return recommendation.to_dict()


# ============================================================================
# Fatigue
# ============================================================================


@app.post("/fatigue/score")
def fatigue_score(request: FatigueScoreRequest):
    worker = request.worker.to_domain()
    shifts = [s.to_domain() for s in request.shifts]
    rules = request.rules.to_domain()

    score = calculate_fatigue_score(
        worker,
        shifts,
        rules,
        request.reference,
        projector=create_projector(request.projector, request.seed),
        lookback_days=config.FATIGUE_LOOKBACK_DAYS,
    )
    violations = detect_fatigue_violations(
        worker,
        shifts,
        rules,
        request.reference,
        lookback_days=config.FATIGUE_LOOKBACK_DAYS,
    )
    return {
        "score": score.to_dict(),
        "violations": [v.to_dict() for v in violations],
    }


@app.post("/fatigue/team")
def fatigue_team(request: FatigueTeamRequest):
    scores, violations = calculate_all_fatigue_scores(
        [w.to_domain() for w in request.workers],
        [s.to_domain() for s in request.shifts],
        request.rules.to_domain(),
        request.reference,
        projector=create_projector(request.projector, request.seed),
    )
    return {
        "scores": [s.to_dict() for s in scores],
        "violations": [v.to_dict() for v in violations],
    }


# ============================================================================
# Leave
# ============================================================================


@app.get("/leave/lsl/rules")
def get_lsl_rules():
    return {
        "states": [r.to_dict() for r in LSL_STATE_RULES.values()],
        "nes": {
            leave_type.value: {
                "weeks_per_year": entitlement.weeks_per_year,
                "accrual_rate": entitlement.accrual_rate,
                "description": entitlement.description,
            }
            for leave_type, entitlement in NES_ENTITLEMENTS.items()
        },
    }


@app.post("/leave/accruals")
def period_accruals(request: PeriodAccrualRequest):
    if request.accrual_config.worker_id != request.worker_id:
        raise HTTPException(
            status_code=400,
            detail=f"Accrual config belongs to worker {request.accrual_config.worker_id}, not {request.worker_id}",
        )

    calculation = calculate_period_accruals(
        request.worker_id,
        request.hours_worked,
        request.period_start,
        request.period_end,
        request.accrual_config.to_domain(),
    )
    return calculation.to_dict()


@app.post("/leave/lsl/pro-rata")
def lsl_pro_rata(request: LSLProRataRequest):
    entitlement = get_lsl_pro_rata_entitlement(
        request.state,
        request.service_years,
        request.termination_type,
        request.hourly_rate,
        standard_hours_per_week=request.standard_hours_per_week,
    )
    return entitlement.to_dict()


@app.post("/leave/export")
def leave_export(request: LeaveExportRequest):
    leave_type_mapping = None
    if request.leave_type_mapping is not None:
        leave_type_mapping = {k: v.to_domain() for k, v in request.leave_type_mapping.items()}

    rows = export_leave_balances(
        [b.to_domain() for b in request.balances],
        request.worker_mapping,
        request.as_of,
        leave_type_mapping,
    )
    logging.info(f"Exported {len(rows)} leave balance rows")
    return {"rows": [r.to_dict() for r in rows]}
