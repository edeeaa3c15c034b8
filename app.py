"""Gemini Fitness - Streamlit App."""

import logging
import streamlit as st

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)

from gemini_fitness.config import AppSettings
from gemini_fitness.exceptions import ConfigurationError, GeminiFitnessError
from gemini_fitness.models.workout_session import SetStatus, WorkoutSession
from gemini_fitness.storage.google_sheets import GoogleSheetsStore, setup_workout_sheets
from gemini_fitness.storage.snapshot import LocalSnapshotStore
from gemini_fitness.tracker import WorkoutTracker
from gemini_fitness.utils.gemini_client import GeminiClient
from gemini_fitness.utils.google_auth import (
    get_authorization_url,
    exchange_code_for_token,
    credentials_to_dict,
    credentials_from_dict,
    refresh_credentials,
    get_user_info,
    revoke_credentials,
)
from gemini_fitness.utils.secure_storage import SecureCredentialStorage

# Page config
st.set_page_config(
    page_title="Gemini Fitness",
    page_icon="🏋️",
    layout="wide",
)

VIEWS = ("templates", "session", "summary", "history")


def initialize_session_state() -> None:
    """Initialize all session state variables."""
    defaults = {
        "authenticated": False,
        "user_info": None,
        "credentials": None,
        "store": None,
        "tracker": None,
        "view": "templates",
        "exercise_index": 0,
        "summary": None,
        "error": None,
    }
    for key, value in defaults.items():
        if key not in st.session_state:
            st.session_state[key] = value


@st.cache_resource
def get_settings() -> AppSettings:
    return AppSettings.from_secrets(st.secrets)


def get_credential_storage() -> SecureCredentialStorage:
    # The cookie component renders once per script run.
    storage = SecureCredentialStorage(encryption_key=get_settings().cookie_encryption_key)
    st.session_state.credential_storage = storage
    return storage


def get_snapshot() -> LocalSnapshotStore:
    """Snapshot store for the signed-in user."""
    settings = get_settings()
    user_info = st.session_state.user_info or {}
    root = LocalSnapshotStore(settings.snapshot_dir, settings.snapshot_encryption_key)
    return root.for_user(user_info.get("email", ""))


def restore_session_from_cookie() -> bool:
    """
    Try to restore authentication from the browser's credentials cookie.

    Returns:
        True if session was restored, False otherwise
    """
    storage = st.session_state.credential_storage
    saved_credentials = storage.load_credentials()
    if not saved_credentials:
        return False

    try:
        creds = refresh_credentials(credentials_from_dict(saved_credentials))
        user_info = get_user_info(creds)

        st.session_state.authenticated = True
        st.session_state.credentials = credentials_to_dict(creds)
        st.session_state.user_info = user_info

        logger.info(f"Restored session for {user_info.get('email')}")
        return True

    except Exception as e:
        logger.warning(f"Failed to restore session from cookie: {e}")
        storage.clear_credentials()
        return False


def handle_oauth_callback() -> None:
    """Handle OAuth callback with authorization code."""
    query_params = st.query_params
    if "code" not in query_params:
        return

    if st.session_state.authenticated:
        st.query_params.clear()
        return

    try:
        credentials = exchange_code_for_token(query_params["code"], get_settings())
        st.query_params.clear()

        st.session_state.credentials = credentials_to_dict(credentials)
        st.session_state.user_info = get_user_info(credentials)
        st.session_state.authenticated = True
        st.session_state.credential_storage.save_credentials(st.session_state.credentials)

        st.rerun()

    except Exception as e:
        logger.error(f"OAuth error: {str(e)}", exc_info=True)
        st.query_params.clear()
        st.error(f"Sign-in failed: {str(e)}")


def initialize_services() -> None:
    """Connect to Google Sheets, set up the sheets and load templates."""
    if st.session_state.tracker or not st.session_state.credentials:
        return

    settings = get_settings()

    creds = refresh_credentials(credentials_from_dict(st.session_state.credentials))
    st.session_state.credentials = credentials_to_dict(creds)

    store = GoogleSheetsStore(creds).connect()
    st.session_state.store = store

    try:
        snapshot = get_snapshot()
        sheet_ids = snapshot.load_sheet_ids()
        if sheet_ids is None:
            with st.status("Setting up your Google Sheets...") as status:
                sheet_ids = setup_workout_sheets(
                    store, on_status=lambda message: status.update(label=message)
                )
            snapshot.save_sheet_ids(sheet_ids)

        tracker = WorkoutTracker(
            store=store,
            snapshot=snapshot,
            generator=GeminiClient(settings.gemini_api_key, settings.gemini_model),
            sheet_ids=sheet_ids,
        )
        with st.spinner("Loading workouts from your Google Sheet..."):
            tracker.load_templates()
        st.session_state.tracker = tracker
        st.session_state.error = None

    except GeminiFitnessError as e:
        logger.error(f"Failed to load workout templates: {e}", exc_info=True)
        st.session_state.error = "Failed to load workout templates from Google Sheets."


def logout() -> None:
    """Clear authentication, this user's sheet IDs and session state."""
    st.session_state.credential_storage.clear_credentials()

    if st.session_state.user_info:
        get_snapshot().clear_sheet_ids()
    if st.session_state.credentials:
        revoke_credentials(credentials_from_dict(st.session_state.credentials))
    if st.session_state.store:
        st.session_state.store.close()

    for key in list(st.session_state.keys()):
        del st.session_state[key]

    logger.info("User logged out")
    st.rerun()


def navigate(view: str) -> None:
    st.session_state.view = view


def login_page() -> None:
    """Display login page."""
    st.title("🏋️ Gemini Fitness")
    st.markdown("### Track your lifts, get an AI recap after every session")

    st.markdown("""
    - Pick a workout template from your Google Sheet
    - Log the weight and reps of every set
    - Get a motivating summary when you finish

    Sign in with your Google account to start.
    """)

    if st.button("🔐 Sign in with Google", type="primary"):
        auth_url = get_authorization_url(get_settings())
        st.markdown(
            f'<meta http-equiv="refresh" content="0;url={auth_url}">',
            unsafe_allow_html=True
        )

    st.info("ℹ️ Templates and history are stored in a 'Gemini Workout Tracker' folder on your Google Drive.")


def templates_view(tracker: WorkoutTracker) -> None:
    st.subheader("Weekly Stats")
    st.metric("Workouts this week", tracker.workouts_this_week())

    st.header("Choose Your Workout")
    columns = st.columns(3)
    for i, template in enumerate(tracker.templates):
        with columns[i % 3].container(border=True):
            st.markdown(f"#### {template.name}")
            st.write(template.description)
            st.caption(" · ".join(template.muscle_groups))
            if not template.is_valid:
                st.warning("Some sets in this template have invalid numbers.")
            if st.button("Start Workout", key=f"start-{template.id}", use_container_width=True):
                tracker.start_workout(template.id)
                st.session_state.exercise_index = 0
                navigate("session")
                st.rerun()


def set_row(tracker: WorkoutTracker, exercise_index: int, set_index: int) -> None:
    current = tracker.current.exercises[exercise_index].sets[set_index]
    done = current.is_done
    key = f"{tracker.current.id}-{exercise_index}-{set_index}"

    cols = st.columns([1, 2, 2, 2, 2])
    cols[0].markdown(f"**Set {set_index + 1}**")
    cols[1].write(f"{current.suggested_weight} lbs x {current.suggested_reps} reps")
    weight = cols[2].number_input(
        "Weight (lbs)", value=float(current.completed_weight or 0), step=5.0,
        key=f"w-{key}", disabled=done, label_visibility="collapsed",
    )
    reps = cols[3].number_input(
        "Reps", value=int(current.completed_reps or 0), step=1,
        key=f"r-{key}", disabled=done, label_visibility="collapsed",
    )

    with cols[4]:
        if done:
            st.caption(current.status.value)
            if st.button("Edit", key=f"edit-{key}"):
                tracker.reopen_set(exercise_index, set_index)
                st.rerun()
        else:
            if st.button("Done", key=f"done-{key}"):
                weight = int(weight) if float(weight).is_integer() else weight
                tracker.complete_set(exercise_index, set_index, weight, int(reps))
                st.rerun()
            if st.button("Skip", key=f"skip-{key}"):
                tracker.skip_set(exercise_index, set_index)
                st.session_state.pop(f"w-{key}", None)
                st.session_state.pop(f"r-{key}", None)
                st.rerun()


def session_view(tracker: WorkoutTracker) -> None:
    workout = tracker.current
    if workout is None or workout.is_completed:
        navigate("templates")
        st.rerun()
        return

    total = len(workout.exercises)
    index = min(st.session_state.exercise_index, max(total - 1, 0))

    st.header(workout.template_name)
    st.progress((index + 1) / max(total, 1), text=f"{index + 1} / {total}")

    if total:
        exercise = workout.exercises[index]
        st.markdown(f"### {exercise.name}")
        st.caption(f"{exercise.muscle_group} · {exercise.status.value}")
        for set_index in range(len(exercise.sets)):
            set_row(tracker, index, set_index)

    prev_col, finish_col, next_col = st.columns(3)
    if prev_col.button("◀ Previous", disabled=index == 0):
        st.session_state.exercise_index = index - 1
        st.rerun()
    if next_col.button("Next ▶", disabled=index >= total - 1):
        st.session_state.exercise_index = index + 1
        st.rerun()
    if finish_col.button("✅ Finish Workout", type="primary"):
        finish_workout(tracker)


def finish_workout(tracker: WorkoutTracker) -> None:
    try:
        tracker.finish_workout()
    except GeminiFitnessError as e:
        logger.error(f"Failed to finish workout: {e}", exc_info=True)
        st.error(f"Could not finish workout: {e}")
        return

    st.session_state.summary = None
    navigate("summary")
    st.rerun()


def summary_view(tracker: WorkoutTracker) -> None:
    workout = tracker.current
    if workout is None or not workout.is_completed:
        navigate("templates")
        st.rerun()
        return

    st.header(f"{workout.template_name} complete!")
    if tracker.last_result is not None:
        for problem in tracker.last_result.problems:
            st.error(problem)
    if st.session_state.summary is None:
        with st.spinner("Generating your workout summary..."):
            st.session_state.summary = tracker.summarize()
    st.markdown(st.session_state.summary)

    if tracker.sync_queue.pending and st.button("Retry saving to Google Sheets"):
        tracker.retry_sync()
        st.rerun()

    if st.button("Back to Home", type="primary"):
        tracker.go_home()
        navigate("templates")
        st.rerun()


def history_entry(workout: WorkoutSession) -> None:
    with st.container(border=True):
        st.markdown(f"#### {workout.template_name}")
        st.caption(workout.date.strftime("%A, %B %d, %Y"))
        for exercise in workout.exercises:
            with st.expander(exercise.name):
                for i, performed in enumerate(exercise.sets, start=1):
                    badge = {
                        SetStatus.COMPLETED: ":green",
                        SetStatus.SKIPPED: ":red",
                    }.get(performed.status, ":gray")
                    st.markdown(
                        f"Set {i}: {performed.completed_weight} lbs x {performed.completed_reps} reps "
                        f"{badge}[{performed.status.value}]"
                    )


def history_view(tracker: WorkoutTracker) -> None:
    st.header("Workout History")
    history = tracker.history_newest_first()
    if not history:
        st.write("You haven't completed any workouts yet. Let's get started!")
        return
    for workout in history:
        history_entry(workout)


def main_app() -> None:
    """Main application UI."""
    initialize_services()

    with st.sidebar:
        st.title("🏋️ Gemini Fitness")
        user_info = st.session_state.user_info
        if user_info:
            st.write(user_info.get("email"))
        if st.button("🏠 Home", use_container_width=True):
            navigate("templates")
        if st.button("📜 History", use_container_width=True):
            navigate("history")
        st.markdown("---")
        if st.button("Sign out", use_container_width=True):
            logout()

    if st.session_state.error:
        st.error(st.session_state.error)

    tracker = st.session_state.tracker
    if tracker is None:
        return

    view = st.session_state.view if st.session_state.view in VIEWS else "templates"
    if view == "session":
        session_view(tracker)
    elif view == "summary":
        summary_view(tracker)
    elif view == "history":
        history_view(tracker)
    else:
        templates_view(tracker)


def main() -> None:
    """Main app entry point."""
    initialize_session_state()

    try:
        get_settings()
    except ConfigurationError as e:
        st.error(str(e))
        return

    get_credential_storage()
    handle_oauth_callback()

    if st.session_state.authenticated or restore_session_from_cookie():
        main_app()
        return

    login_page()


if __name__ == "__main__":
    main()
