"""
CPU 스케줄링 시뮬레이터 - FastAPI 백엔드
"""

from fastapi import FastAPI, HTTPException, WebSocket, WebSocketDisconnect
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import FileResponse
from pydantic import BaseModel, Field, ValidationError
from typing import List, Dict
import asyncio
import json
import os

from core.errors import SchedulerError
from core.process import ProcessDescriptor
from core.scheduler_base import BaseScheduler, GanttEntry, DEFAULT_TIME_SLICES
from schedulers import FCFSScheduler, RoundRobinScheduler

app = FastAPI(
    title="CPU Scheduler Simulator",
    description="이산 사건 기반 CPU 스케줄링 시뮬레이터 (FCFS, Round Robin)",
    version="1.0.0"
)

# CORS 설정
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Pydantic 모델
class ProcessInput(BaseModel):
    pid: int
    arrival_time: int = Field(0, ge=0)
    execution_pattern: List[int]  # [CPU, I/O, CPU, ...]


class SimulationRequest(BaseModel):
    processes: List[ProcessInput]
    algorithms: List[str] = ['FCFS', 'RoundRobin']
    time_slice: int = Field(10, gt=0)


class CompareRequest(BaseModel):
    processes: List[ProcessInput]
    time_slices: List[int] = list(DEFAULT_TIME_SLICES)


class RealtimeInitRequest(BaseModel):
    processes: List[ProcessInput]
    algorithm: str = 'FCFS'
    time_slice: int = Field(10, gt=0)


class RealtimeRunRequest(BaseModel):
    speed: float = Field(1.0, gt=0)  # 초당 이벤트 수


def create_descriptors(process_inputs: List[ProcessInput]) -> List[ProcessDescriptor]:
    """ProcessInput을 ProcessDescriptor로 변환"""
    return [
        ProcessDescriptor.from_pattern(p.pid, p.arrival_time, p.execution_pattern)
        for p in process_inputs
    ]


def create_scheduler(processes: List[ProcessDescriptor], algorithm: str,
                     time_slice: int) -> BaseScheduler:
    if algorithm == 'FCFS':
        return FCFSScheduler(processes)
    if algorithm == 'RoundRobin':
        return RoundRobinScheduler(processes, time_slice)
    raise HTTPException(status_code=400, detail=f"Unknown algorithm: {algorithm}")


def serialize_gantt(entry: GanttEntry) -> Dict:
    return {
        'pid': entry.pid,
        'start_time': entry.start_time,
        'end_time': entry.end_time,
        'state': entry.state.value,
    }


def serialize_result(result: Dict) -> Dict:
    """스케줄러 결과를 JSON 응답 형태로 변환"""
    return {
        'algorithm': result['algorithm'],
        'quantum': result['quantum'],
        'completions': [r.to_dict() for r in result['completions']],
        'aggregate': result['aggregate'].to_dict(),
        'statistics': result['statistics'],
        'gantt_chart': [serialize_gantt(e) for e in result['gantt_chart']],
        'event_log': result['event_log'],
    }


@app.get("/")
async def root():
    """메인 페이지 - index.html이 있으면 반환"""
    index_path = os.path.join(os.path.dirname(__file__), '..', 'index.html')
    if os.path.exists(index_path):
        return FileResponse(index_path)
    return {"message": "CPU Scheduler Simulator API", "version": "1.0.0"}


@app.get("/algorithms")
async def get_algorithms():
    """사용 가능한 알고리즘 목록 반환"""
    return {
        "algorithms": [
            {"id": "FCFS", "name": "FCFS (First-Come, First-Served)", "preemptive": False},
            {"id": "RoundRobin", "name": "Round Robin", "preemptive": True},
        ]
    }


@app.post("/simulate")
async def simulate(request: SimulationRequest):
    """스케줄링 시뮬레이션 실행 (알고리즘마다 새 엔진)"""
    try:
        results = []
        for algorithm in request.algorithms:
            processes = create_descriptors(request.processes)
            scheduler = create_scheduler(processes, algorithm, request.time_slice)
            results.append(serialize_result(scheduler.run()))
        return {"success": True, "results": results}

    except SchedulerError as e:
        raise HTTPException(status_code=400, detail=str(e))


@app.post("/simulate/compare")
async def compare_policies(request: CompareRequest):
    """FCFS와 각 타임 슬라이스의 Round Robin 비교"""
    if any(q <= 0 for q in request.time_slices):
        raise HTTPException(status_code=400, detail="time_slices must be positive")
    try:
        runs = [('FCFS', 0)] + [('RoundRobin', q) for q in request.time_slices]
        results = []
        comparison = {
            'algorithms': [],
            'avg_waiting_time': [],
            'makespan': [],
            'idle_time': [],
            'cpu_utilization': [],
            'context_switches': [],
        }

        for algorithm, time_slice in runs:
            processes = create_descriptors(request.processes)
            result = serialize_result(
                create_scheduler(processes, algorithm, time_slice).run())
            results.append(result)

            # 비교 데이터 수집
            stats = result['statistics']
            comparison['algorithms'].append(result['algorithm'])
            for key in ('avg_waiting_time', 'makespan', 'idle_time',
                        'cpu_utilization', 'context_switches'):
                comparison[key].append(stats[key])

        return {
            "success": True,
            "results": results,
            "comparison": comparison
        }

    except SchedulerError as e:
        raise HTTPException(status_code=400, detail=str(e))


# WebSocket을 통한 실시간 시뮬레이션
class RealtimeSimulator:
    """엔진을 이벤트 단위로 진행시키며 변경분을 전달"""

    def __init__(self, processes: List[ProcessDescriptor], algorithm: str, time_slice: int = 10):
        self.algorithm = algorithm
        self.scheduler = create_scheduler(processes, algorithm, time_slice)
        self.is_complete = False
        self.last_gantt_index = 0
        self.last_log_index = 0

    def step(self) -> Dict:
        """이벤트 하나 처리 및 상태 반환"""
        if self.is_complete:
            return {'complete': True}

        is_complete = self.scheduler.step()

        # 새로운 Gantt 엔트리와 로그
        gantt = self.scheduler.gantt_chart
        new_gantt = [serialize_gantt(e) for e in gantt[self.last_gantt_index:]]
        self.last_gantt_index = len(gantt)

        logs = self.scheduler.event_log
        new_logs = logs[self.last_log_index:]
        self.last_log_index = len(logs)

        snapshot = self.scheduler.get_current_snapshot()
        state = {
            'complete': is_complete,
            'time': snapshot['time'],
            'running': snapshot['running'],
            'ready_queue': snapshot['ready_queue'],
            'waiting_io': snapshot['waiting_io'],
            'finished': snapshot['finished'],
            'new_gantt': new_gantt,
            'new_logs': new_logs,
        }

        if is_complete:
            self.is_complete = True
            state['final'] = serialize_result(self.scheduler.get_results())

        return state


@app.websocket("/ws/realtime")
async def websocket_realtime(websocket: WebSocket):
    """실시간 시뮬레이션 WebSocket 엔드포인트"""
    await websocket.accept()
    simulator = None

    try:
        while True:
            data = await websocket.receive_text()

            try:
                message = json.loads(data)
                if not isinstance(message, dict):
                    raise ValueError("메시지는 JSON 객체여야 합니다")
                action = message.get('action')

                if action == 'init':
                    request = RealtimeInitRequest(**message)
                    processes = create_descriptors(request.processes)
                    simulator = RealtimeSimulator(processes, request.algorithm, request.time_slice)
                    await websocket.send_json({
                        'type': 'initialized',
                        'algorithm': simulator.scheduler.name,
                        'process_count': len(processes)
                    })

                elif action in ('step', 'run') and simulator is None:
                    await websocket.send_json({'type': 'error', 'message': 'not initialized'})

                elif action == 'step':
                    await websocket.send_json({'type': 'step_result', **simulator.step()})

                elif action == 'run':
                    # 자동 실행 (속도 조절 가능)
                    request = RealtimeRunRequest(**message)
                    delay = 1.0 / request.speed
                    while not simulator.is_complete:
                        await websocket.send_json({'type': 'step_result', **simulator.step()})
                        await asyncio.sleep(delay)

                else:
                    await websocket.send_json({'type': 'error', 'message': f"Unknown action: {action}"})

            except (SchedulerError, HTTPException, ValidationError, ValueError, KeyError) as e:
                detail = e.detail if isinstance(e, HTTPException) else str(e)
                await websocket.send_json({'type': 'error', 'message': detail})

    except WebSocketDisconnect:
        pass


@app.get("/sample-processes")
async def get_sample_processes():
    """샘플 프로세스 데이터 반환"""
    return {
        "samples": [
            {
                "name": "단일 프로세스",
                "processes": [
                    {"pid": 1, "arrival_time": 0, "execution_pattern": [5]}
                ]
            },
            {
                "name": "Round Robin 교대 실행",
                "processes": [
                    {"pid": 1, "arrival_time": 0, "execution_pattern": [10]},
                    {"pid": 2, "arrival_time": 1, "execution_pattern": [4]}
                ]
            },
            {
                "name": "I/O 포함 (3개 프로세스)",
                "processes": [
                    {"pid": 1, "arrival_time": 0, "execution_pattern": [5, 3, 5]},
                    {"pid": 2, "arrival_time": 1, "execution_pattern": [3, 2, 3]},
                    {"pid": 3, "arrival_time": 2, "execution_pattern": [8]}
                ]
            }
        ]
    }


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
